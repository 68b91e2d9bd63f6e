# mock_api/extensions.py
from flask_cors import CORS

from .storage.json_store import CollectionStore

# CORS backstop for responses that do not go through the JSON envelope
# (unhandled errors); the envelope sets its own headers and flask-cors skips those.
cors = CORS()

# Bound to a data file in create_app via init_app
store = CollectionStore()
