"""Run the command line interface with `python -m cellres`."""

from cellres.cli import cli

if __name__ == "__main__":

    cli()
