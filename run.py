import argparse
import logging

from mock_api import create_app
from mock_api.config import Config, DevConfig
from mock_api.extensions import store
from mock_api.logging_setup import setup_logging

logger = logging.getLogger("mock_api")


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="JSON API Mock Server")
    p.add_argument("port", nargs="?", type=int, default=Config.PORT, help="Port to listen on (default 3000)")
    p.add_argument("data_file", nargs="?", default=Config.DATA_FILE, help="JSON data file (default mock-data.json)")
    p.add_argument("--host", default=Config.HOST, help="Interface to bind")
    p.add_argument("--debug", action="store_true", default=Config.DEBUG, help="Run Flask in debug mode")
    p.add_argument("--log-level", dest="log_level", default=None, help="Logging level (DEBUG, INFO, WARNING, ERROR)")
    p.add_argument("--access-log", action="store_true", help="Also show the Werkzeug access log")
    return p.parse_args(argv)


def main(argv=None):
    a = parse_args(argv)
    setup_logging(a.log_level, access_log=a.access_log)

    app = create_app(DevConfig if a.debug else Config, DATA_FILE=a.data_file, PORT=a.port, HOST=a.host)

    logger.info("JSON API Mock Server running on http://localhost:%s", a.port)
    logger.info("Data file: %s", a.data_file)
    for name in store.collections():
        logger.info("Collection: http://localhost:%s/%s", a.port, name)

    app.run(host=a.host, port=a.port, debug=a.debug, use_reloader=False)


if __name__ == "__main__":
    main()
