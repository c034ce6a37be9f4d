from inventorize.main import run_cli_directly

run_cli_directly()
