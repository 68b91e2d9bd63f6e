from flask import Flask
from .config import Config
from .extensions import cors, store


def create_app(config_class: type[Config] = Config, **overrides):
    app = Flask(__name__)
    app.config.from_object(config_class)
    app.config.update(overrides)

    # "//users" is an empty collection name, not a redirect to "/users"
    app.url_map.merge_slashes = False

    # Pretty-printed JSON, insertion order kept
    app.json.compact = False
    app.json.sort_keys = False
    app.json.ensure_ascii = False

    # Extensions
    cors.init_app(app)
    store.init_app(app)

    # Blueprints
    from .routes.api import bp as api

    app.register_blueprint(api)

    return app
