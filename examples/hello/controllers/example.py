from roost import Controller, Response, route


@route("/")
class HomeController(Controller):
    def get(self):
        return "Hello, World!"


@route("/example", name="example")
class ExampleController(Controller):
    def get(self):
        return "example get"

    def post(self):
        return "Created", 201


@route("/custom")
class CustomController(Controller):
    def get(self):
        return Response("custom body").with_header("X-Custom", "yes")
