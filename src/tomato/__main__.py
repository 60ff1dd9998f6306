from tomato.cli.main import cli

cli()
