from sizecheck.cli import app

app(prog_name="sizecheck")
