from .cli import cli

cli(prog_name="markdown-to-html")
