from .cli import app

app(prog_name="payments-engine")
