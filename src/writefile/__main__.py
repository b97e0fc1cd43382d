from writefile.cli.main import app

app(prog_name="writefile")
