"""Capsule — the smallest geode app.

Demonstrates regex routes, positional and named captures, stacked
handlers, and the input prompt.

Run behind a CGI-capable Gemini server, or try it locally:
    geode request app:app /page/3
"""

from geode import App, Request, RequireInput, Response
from geode.middleware import Next

app = App()


@app.route("/")
def index(request: Request, response: Response, next: Next) -> Response:
    response.write("# Capsule\n=> /page/1 First page\n=> /hello Say hello\n")
    return response


@app.route(r"/page/(\d+)(?:/(\d+))?")
def page(request: Request, response: Response, next: Next) -> Response:
    response.write(f"# Page {'.'.join(request.params)}\n")
    return response


@app.route(r"/tag/(?<tag>[a-z-]+)")
def tag(request: Request, response: Response, next: Next) -> Response:
    response.write(f"# Posts tagged {request.params['tag']}\n")
    return response


def hello(request: Request, response: Response, next: Next) -> Response:
    response.write(f"Hello, {request.input}!\n")
    return response


def footer(request: Request, response: Response, next: Next) -> Response:
    response = next(request, response)
    if response.status.is_success:
        response.write("\n=> / Home\n")
    return response


app.add_handler("/hello", hello).add_to_stack(RequireInput("What is your name?")).add_to_stack(
    footer
)


if __name__ == "__main__":
    app.run()
