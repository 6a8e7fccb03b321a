"""Weather lookup web service backed by the local postgres container."""

import base64
import binascii
import logging
import os
import secrets
import sys
from pathlib import Path

import psycopg
import uvicorn
from fastapi import Depends, FastAPI, Query, Request
from fastapi.responses import HTMLResponse, PlainTextResponse
from fastapi.templating import Jinja2Templates

from . import db
from .open_meteo import LatLong, OpenMeteo

log = logging.getLogger(__name__)

HOST = os.getenv("HOST", "127.0.0.1")
STATS_USER = os.getenv("STATS_USER", "forecast")
STATS_PASSWORD = os.getenv("STATS_PASSWORD", "forecast")

AUTH_SCHEME_VALUE = 'Basic realm="Please enter your credentials"'

templates = Jinja2Templates(directory=str(Path(__file__).with_name("templates")))


class NoResultsFound(Exception):
    pass


class FetchWeatherFailed(Exception):
    pass


class Unauthorized(Exception):
    pass


def get_cities():
    with db.get_conn() as conn:
        yield db.Cities(conn)


def get_open_meteo() -> OpenMeteo:
    return OpenMeteo()


def require_user(request: Request) -> str:
    """Check HTTP basic credentials. Any missing, malformed or wrong header is unauthorized."""
    scheme, _, token = request.headers.get("Authorization", "").partition(" ")
    if scheme.lower() != "basic":
        raise Unauthorized()
    try:
        decoded = base64.b64decode(token.strip(), validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError):
        raise Unauthorized()
    username, sep, password = decoded.partition(":")
    if not sep:
        raise Unauthorized()

    user_ok = secrets.compare_digest(username.encode(), STATS_USER.encode())
    password_ok = secrets.compare_digest(password.encode(), STATS_PASSWORD.encode())
    if not (user_ok and password_ok):
        raise Unauthorized()
    return username


def get_lat_long(cities: db.Cities, open_meteo: OpenMeteo, name: str) -> LatLong:
    """Return the cached coordinates for ``name``, geocoding and caching on a miss."""
    lat_long = cities.lat_long(name)
    if lat_long is not None:
        return lat_long

    lat_long = open_meteo.lat_long(name)
    if lat_long is None:
        raise NoResultsFound()
    cities.add(name, lat_long)
    return lat_long


app = FastAPI(title="Forecast", version="0.1.0")


@app.exception_handler(NoResultsFound)
def no_results_found_handler(request: Request, exc: NoResultsFound):
    return PlainTextResponse("no results found", status_code=404)


@app.exception_handler(FetchWeatherFailed)
def fetch_weather_failed_handler(request: Request, exc: FetchWeatherFailed):
    return PlainTextResponse("failed to fetch weather", status_code=405)


@app.exception_handler(Unauthorized)
def unauthorized_handler(request: Request, exc: Unauthorized):
    return PlainTextResponse(
        "unauthorized",
        status_code=401,
        headers={"WWW-Authenticate": AUTH_SCHEME_VALUE},
    )


@app.exception_handler(psycopg.Error)
def database_error_handler(request: Request, exc: psycopg.Error):
    log.error("database error: %s", exc)
    return PlainTextResponse("internal server error", status_code=500)


@app.get("/", response_class=HTMLResponse)
def index(request: Request):
    return templates.TemplateResponse(request, "index.html")


@app.get("/weather", response_class=HTMLResponse)
def weather(
    request: Request,
    city: str = Query(...),
    cities: db.Cities = Depends(get_cities),
    open_meteo: OpenMeteo = Depends(get_open_meteo),
):
    lat_long = get_lat_long(cities, open_meteo, city)
    response = open_meteo.forecast(lat_long)
    if response is None:
        raise FetchWeatherFailed()
    return templates.TemplateResponse(
        request,
        "weather.html",
        {"city": city, "forecasts": response.forecasts()},
    )


@app.get("/stats", response_class=HTMLResponse)
def stats(
    request: Request,
    user: str = Depends(require_user),
    cities: db.Cities = Depends(get_cities),
):
    return templates.TemplateResponse(
        request, "stats.html", {"cities": cities.recent(10)}
    )


def main() -> int:
    logging.basicConfig(
        level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )
    try:
        db.init_db()
    except psycopg.Error as exc:
        log.error("database error: %s", exc)
        return 1

    uvicorn.run(app, host=HOST, port=int(os.getenv("PORT", "3000")))
    return 0


if __name__ == "__main__":
    sys.exit(main())
