import sys

import typer

import cli.cli

if __name__ == "__main__":
    # Default to a 45 minute hypertrophy session when run without arguments
    if len(sys.argv) == 1:
        sys.argv = ["run_cli.py", "generate", "--duration", "45", "--goal", "hypertrophy", "--warm-up"]
    typer_app: typer.Typer = cli.cli.app
    typer_app()
