"""Terminal styling used for rendered rows."""

from rich.style import Style

DIM = Style(dim=True)
EXCEPTION = Style(color="red")


class Theme:
    """Styling for trace boxes and exception messages, rendered to SGR sequences."""

    def __init__(self, dim: Style = DIM, exception: Style = EXCEPTION):
        self.dim_style = dim
        self.exception_style = exception

    def dim(self, text: str) -> str:
        return self.dim_style.render(text)

    def exception(self, text: str) -> str:
        return self.exception_style.render(text)
