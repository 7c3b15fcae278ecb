from cities_api.cli import run

run()
