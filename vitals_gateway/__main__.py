from vitals_gateway.main import run

run()
