import os
import logging
import azure.functions as func

from src.function_blueprints.http_admin import bp as admin_bp
from src.function_blueprints.http_contact import bp as contact_bp
from src.function_blueprints.http_public_content import bp as public_content_bp
from src.function_blueprints.http_query import bp as query_bp

app = func.FunctionApp()


def _configure_logging() -> None:
    lvl = (os.getenv("AZURE_SDK_LOG_LEVEL") or "").upper()
    if lvl:
        level = getattr(logging, lvl, logging.INFO)
        logging.getLogger("azure").setLevel(level)
        logging.getLogger("azure.cosmos").setLevel(level)
    logging.getLogger("portfolio").setLevel(logging.INFO)


_configure_logging()

app.register_functions(public_content_bp)
app.register_functions(query_bp)
app.register_functions(contact_bp)
app.register_functions(admin_bp)
