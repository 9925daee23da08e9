import typer

from symbuild.common.messaging import protocols


class CliRenderer(protocols.Renderer):
    """
    Renders messages to the command line using Typer for colored output.
    Errors go to stderr, everything else to stdout.
    """

    def render(self, message: str, level: str) -> None:
        color = None
        if level == "success":
            color = typer.colors.GREEN
        elif level == "warning":
            color = typer.colors.YELLOW
        elif level == "error":
            color = typer.colors.RED
        elif level == "debug":
            color = typer.colors.BRIGHT_BLACK

        typer.secho(message, fg=color, err=level == "error")
