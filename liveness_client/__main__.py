from liveness_client.main import app_entry

app_entry()
