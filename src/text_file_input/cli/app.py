import logging
from typing import Annotated

import typer

from text_file_input.cli.actions import content, fields, files, minimal_width, validate
from text_file_input.cli.serve import serve_app

app = typer.Typer(
    name="text-file-input",
    help="Preview files, sample content and infer fields for the text file input step.",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)


@app.callback()
def _configure(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging.")] = False,
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


app.command("files")(files)
app.command("validate")(validate)
app.command("content")(content)
app.command("fields")(fields)
app.command("minimal-width")(minimal_width)
app.add_typer(serve_app, name="serve")


def main() -> None:
    app()
