import logging
import sys

from flask import Blueprint, Flask, current_app, render_template, request
from flask_cors import CORS

from .catapi import CatApiClient, CatApiError, ConfigError
from .projection import DetailError, ShapeError, project
from .settings import load_settings

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
NO_BREED_MESSAGE = "Oops! There seems to be no cat by that breed in our database."

views = Blueprint("views", __name__)


def _client():
    return current_app.extensions["catapi"]


def _fail(message):
    return message, 500, {"Content-Type": "text/plain; charset=utf-8"}


def _render_detail(image):
    try:
        detail = project(image)
    except ShapeError as e:
        logger.warning("Cannot render cat detail: %s", e)
        return _fail("Failed to get URL from cat data")
    return render_template("cat-detail.html", **detail.as_context())


@views.route("/")
def index():
    try:
        cats = _client().search_images(current_app.config["GALLERY_LIMIT"])
    except CatApiError as e:
        logger.error("Failed to get cat images: %s", e)
        return _fail("Failed to get cat images")

    return render_template("index.html", Results=cats.items)


@views.route("/cat/<image_id>")
def cat_detail(image_id):
    try:
        cat = _client().get_image(image_id)
    except CatApiError as e:
        logger.error("Failed to get cat image %s: %s", image_id, e)
        return _fail("Failed to get cat image by ID")

    return _render_detail(cat.data)


@views.route("/search")
def search():
    breed = request.args.get("q", "").lower()
    try:
        cats = _client().search_images(1, breed_id=breed)
    except CatApiError as e:
        logger.info("Breed search for %r failed: %s", breed, e)
        cats = None

    if not cats:
        return render_template("cat-detail.html", **DetailError(NO_BREED_MESSAGE).as_context())

    return _render_detail(cats.items[0])


def create_app(settings=None, client=None):
    """Build the Flask app.

    Settings are read from the environment when not given, so a missing
    CAT_API_KEY raises ConfigError before any route is registered.
    """
    if settings is None:
        settings = load_settings()
    if client is None:
        client = CatApiClient(
            settings.cat_api_key,
            base_url=settings.cat_api_base_url,
            timeout=settings.cat_api_timeout,
        )

    app = Flask(__name__, static_folder="css", static_url_path="/css")
    app.config["GALLERY_LIMIT"] = settings.gallery_limit
    app.extensions["catapi"] = client
    CORS(app, resources={r"/*": {"origins": "*"}}, send_wildcard=True)
    app.register_blueprint(views)
    return app


def main():
    try:
        settings = load_settings()
    except ConfigError as e:
        logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
        logger.critical("%s", e)
        sys.exit(1)

    logging.basicConfig(level=getattr(logging, settings.log_level, logging.INFO), format=LOG_FORMAT)
    app = create_app(settings)
    logger.info("Using cat API at %s", settings.cat_api_base_url)
    logger.info("Listening on %s:%s", settings.host, settings.port)
    app.run(host=settings.host, port=settings.port, debug=settings.debug, threaded=True)


if __name__ == "__main__":
    main()
