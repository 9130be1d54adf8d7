from shipper.main import app

app()
