import asyncio
from importlib.resources import files

from litestar import Litestar, MediaType, Request, Response, get, post
from litestar.datastructures import State, UploadFile
from litestar.exceptions import HTTPException
from loguru import logger

from asciigrid.colours import resolve_colour
from asciigrid.config import ServerConfig
from asciigrid.converter import convert, png_data_uri
from asciigrid.errors import AsciiGridError, ConfigurationError, error_message
from asciigrid.palette import check_palette, split_palette
from asciigrid.sampling import check_cell_size
from asciigrid.sources import open_source


def _int_field(form, name: str) -> int:
    value = form.get(name)
    if value is None or value == "":
        raise ConfigurationError(f"{name} is required")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"{name} must be an integer, got {value!r}") from None


def _text_field(form, name: str) -> str:
    value = form.get(name)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ConfigurationError(f"{name} must be a text field")
    return value


def _convert_request(
    image_bytes: bytes | None,
    image_link: str | None,
    characters: str,
    cell_width: int,
    cell_height: int,
    bg: str | None,
    pen: str | None,
    config: ServerConfig,
) -> dict[str, str]:
    palette = split_palette(characters)
    check_palette(palette)
    check_cell_size(cell_width, cell_height)
    source = image_bytes if image_bytes else open_source(url=image_link, timeout=config.fetch_timeout)
    result = convert(
        source,
        palette,
        cell_width,
        cell_height,
        want_image=True,
        background=resolve_colour(bg, config.colours),
        ink=resolve_colour(pen, config.colours),
    )
    return {"ascii": result.ascii, "image": png_data_uri(result.image)}


@get("/", media_type=MediaType.HTML)
async def index() -> str:
    return files("asciigrid").joinpath("static/index.html").read_text(encoding="utf-8")


@post("/ascii", status_code=200)
async def ascii_art(request: Request, state: State) -> dict[str, str]:
    """Convert an uploaded or linked image; always returns the rendered image too."""
    form = await request.form()
    upload = form.get("image_file")
    image_bytes = None
    if isinstance(upload, UploadFile) and upload.filename:
        image_bytes = await upload.read()
        await upload.close()
    image_link = _text_field(form, "image_link") or None
    characters = _text_field(form, "characters")
    cell_width = _int_field(form, "sub_width")
    cell_height = _int_field(form, "sub_height")
    logger.info(
        "Converting {} with {} characters, cells {}x{}",
        "upload" if image_bytes else image_link,
        len(characters),
        cell_width,
        cell_height,
    )
    return await asyncio.to_thread(
        _convert_request,
        image_bytes,
        image_link,
        characters,
        cell_width,
        cell_height,
        _text_field(form, "bg"),
        _text_field(form, "pen"),
        state.config,
    )


def _error_response(message: str, status_code: int = 400) -> Response:
    return Response(content={"error": message}, status_code=status_code, media_type=MediaType.JSON)


def handle_asciigrid_error(request: Request, exc: AsciiGridError) -> Response:
    message = error_message(exc)
    logger.warning("{} {} failed: {}", request.method, request.url.path, message)
    return _error_response(message)


def handle_unexpected_error(request: Request, exc: Exception) -> Response:
    """Report any other failure as a 400 carrying only the exception's message.

    HTTP errors raised by the framework (404, 405, ...) keep their status.
    """
    if isinstance(exc, HTTPException):
        return _error_response(exc.detail or error_message(exc), exc.status_code)
    logger.opt(exception=exc).error("{} {} failed unexpectedly", request.method, request.url.path)
    return _error_response(error_message(exc))


def create_app(config: ServerConfig | None = None) -> Litestar:
    config = config or ServerConfig()
    return Litestar(
        route_handlers=[index, ascii_art],
        exception_handlers={AsciiGridError: handle_asciigrid_error, Exception: handle_unexpected_error},
        state=State({"config": config}),
    )


def serve(config: ServerConfig) -> None:
    import uvicorn

    logger.info("Serving on http://{}:{}", config.host, config.port)
    uvicorn.run(create_app(config), host=config.host, port=config.port, log_level="warning")
