"""
Document Server
Flask entry point exposing the document store over HTTP.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from flask import Flask, jsonify

from docserver.controllers.document_controller import DocumentController
from docserver.routers.document_router import document_router
from docstore.core.managers.config_manager import config_manager
from docstore.core.managers.database_manager import DatabaseManager
from docstore.core.managers.document_manager import DocumentManager
from docstore.core.services.document_loader_service import DocumentLoaderService
from docstore.core.utils.configure_logging import configure_logger

logger = logging.getLogger(__name__)


def create_app(db_manager: Optional[DatabaseManager] = None, strict: Optional[bool] = None) -> Flask:
    """
    Application factory wiring the document store into a Flask instance.
    """
    flask_app = Flask(__name__)

    document_manager = DocumentManager(db_manager or DatabaseManager())
    if strict is None:
        strict = config_manager.get_nested("parser.strict", False)

    flask_app.config['DOCUMENT_CONTROLLER'] = DocumentController(document_manager, strict=strict)
    flask_app.config['DOCUMENT_MANAGER'] = document_manager

    flask_app.register_blueprint(document_router)

    @flask_app.errorhandler(404)
    def not_found(_error):
        return jsonify({"error": "404 Not Found"}), 404

    @flask_app.errorhandler(405)
    def method_not_allowed(_error):
        return jsonify({"error": "405 Method Not Allowed"}), 405

    return flask_app


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="XML document store server")
    parser.add_argument("--db-path", type=str, required=False, help="Explicit path to SQLite database")
    parser.add_argument("--host", type=str, help="Host interface to bind to (default: server.host)")
    parser.add_argument("--port", type=int, help="Port to bind the server to (default: server.port)")
    parser.add_argument("--load-dir", type=str, required=False,
                        help="Import every *.xml file of this directory before serving")
    parser.add_argument("--strict", action="store_true",
                        help="Reject documents that end with unclosed tags")
    parser.add_argument("--set", dest="overrides", action="append", default=[], metavar="KEY=VALUE",
                        help="Override a setting, e.g. --set loader.load_on_startup=true")
    parser.add_argument("--show-config", action="store_true",
                        help="Print the effective settings as JSON and exit")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Parses arguments, optionally imports a directory of XML files and starts the server.
    """
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    try:
        config_manager.apply_overrides(args.overrides)
    except ValueError as e:
        parser.error(str(e))
    if args.strict:
        config_manager.set_nested("parser.strict", True)

    if args.show_config:
        print(json.dumps(config_manager.get_all(), indent=2))
        return 0

    configure_logger(
        config_manager.get_nested("debug.level", "INFO"),
        silenced_loggers={"werkzeug": "WARNING"},
    )
    host = args.host or config_manager.get_nested("server.host", "0.0.0.0")
    port = args.port or config_manager.get_nested("server.port", 3456)

    db_manager = DatabaseManager(Path(args.db_path)) if args.db_path else DatabaseManager()
    app = create_app(db_manager)

    load_dir = args.load_dir
    if not load_dir and config_manager.get_nested("loader.load_on_startup", False):
        load_dir = config_manager.get_nested("loader.xml_files_path")
    if load_dir:
        loader = DocumentLoaderService(app.config['DOCUMENT_MANAGER'])
        report = loader.load_directory(Path(load_dir), show_progress=True)
        for name, error in report.failed.items():
            logger.warning("Skipped %s: %s", name, error)

    logger.info("Server listening on %s:%d (database: %s)", host, port, db_manager.db_path)
    try:
        app.run(host=host, port=port, use_reloader=False)
    finally:
        db_manager.close_connections()
    return 0


if __name__ == '__main__':
    sys.exit(main())
