"""Flask application for the web mask editor."""

import sys
import os
import uuid
import logging
import threading
from io import BytesIO

from urllib.parse import urlparse

from flask import (
    Flask, request, jsonify, send_file, abort
)
from PIL import Image

Image.MAX_IMAGE_PIXELS = 25_000_000

# Add parent directory so we can import shared modules
app_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if app_dir not in sys.path:
    sys.path.insert(0, app_dir)

from editor.image_editor import create
from export.generation_client import GenerationClient
from models.errors import GenerationError, InvalidImage
from models.tools import ToolType
from utils.image_io import load_image
from web.state import state

logger = logging.getLogger(__name__)

app = Flask(__name__)
app.secret_key = os.urandom(32)
app.config['MAX_CONTENT_LENGTH'] = 50 * 1024 * 1024  # 50 MB upload limit

ALLOWED_HOSTS = {"localhost", "127.0.0.1"}


@app.before_request
def csrf_check():
    """Reject non-GET/HEAD/OPTIONS requests with a foreign Origin or Referer."""
    if request.method in ("GET", "HEAD", "OPTIONS"):
        return
    origin = request.headers.get("Origin") or request.headers.get("Referer")
    if origin:
        host = urlparse(origin).hostname
        if host not in ALLOWED_HOSTS:
            return jsonify(error="Forbidden: cross-origin request"), 403


def make_generation_client() -> GenerationClient:
    return GenerationClient.from_config(state.config)


def _editor_or_400():
    if state.editor is None:
        abort(400, description="No image loaded")
    return state.editor


@app.errorhandler(400)
def bad_request(e):
    return jsonify(error=e.description), 400


def _editor_info():
    editor = state.editor
    geometry = editor.geometry()
    p = geometry.placement
    return dict(
        filename=state.image_filename,
        width=editor.image_size[0],
        height=editor.image_size[1],
        viewport=dict(width=editor.canvas.width, height=editor.canvas.height),
        placement=dict(x=p.x, y=p.y, width=p.width, height=p.height),
        factor=geometry.factor,
        tool=editor.tool.value,
        brush_size=editor.brush_size,
    )


# ---------------------------------------------------------------------------
# Image
# ---------------------------------------------------------------------------

@app.route("/api/upload-image", methods=["POST"])
def upload_image():
    if "file" not in request.files:
        return jsonify(error="No file provided"), 400
    f = request.files["file"]
    if not f.filename:
        return jsonify(error="Empty filename"), 400

    try:
        img = load_image(f.stream, max_pixels=state.config.max_image_pixels)
    except InvalidImage as e:
        return jsonify(error=str(e)), 400

    with state.lock:
        if state.editor is None:
            state.editor = create(
                state.viewport, img,
                state.config.tool, state.config.default_brush_size,
                config=state.config,
            )
        else:
            state.editor.update_image(img)
        state.image_filename = f.filename
        info = _editor_info()

    logger.info("Loaded %s (%dx%d)", f.filename, img.width, img.height)
    return jsonify(ok=True, **info)


@app.route("/api/editor")
def editor_info():
    with state.lock:
        if state.editor is None:
            return jsonify(loaded=False)
        return jsonify(loaded=True, **_editor_info())


@app.route("/api/viewport.png")
def viewport_image():
    with state.lock:
        if state.editor is None:
            abort(404)
        frame = state.editor.canvas.snapshot()
    buf = BytesIO()
    frame.save(buf, format="PNG")
    buf.seek(0)
    return send_file(buf, mimetype="image/png")


@app.route("/api/viewport", methods=["PUT"])
def resize_viewport():
    data = request.get_json(silent=True) or {}
    try:
        width = int(data["width"])
        height = int(data["height"])
    except (KeyError, TypeError, ValueError):
        return jsonify(error="width and height are required integers"), 400
    if width < 0 or height < 0:
        return jsonify(error="width and height must not be negative"), 400

    with state.lock:
        state.viewport.resize(width, height)
        if state.editor is None:
            return jsonify(ok=True, viewport=dict(width=width, height=height))
        state.editor.resize_viewport()
        return jsonify(ok=True, **_editor_info())


# ---------------------------------------------------------------------------
# Tools & painting
# ---------------------------------------------------------------------------

@app.route("/api/tools")
def list_tools():
    return jsonify(tools=[
        dict(name=t.value, label=t.label, draws=t.draws) for t in ToolType
    ])


@app.route("/api/tool", methods=["PUT"])
def select_tool():
    data = request.get_json(silent=True) or {}
    try:
        tool = ToolType.parse(data.get("tool", ""))
        brush_size = float(data.get("brush_size", state.config.default_brush_size))
    except (TypeError, ValueError) as e:
        return jsonify(error=str(e)), 400

    with state.lock:
        editor = _editor_or_400()
        selection = editor.select_tool(tool, brush_size)
    return jsonify(ok=True, **selection.to_dict())


@app.route("/api/pointer", methods=["POST"])
def update_pointer():
    data = request.get_json(silent=True) or {}
    try:
        x = float(data["x"])
        y = float(data["y"])
    except (KeyError, TypeError, ValueError):
        return jsonify(error="x and y are required numbers"), 400

    with state.lock:
        editor = _editor_or_400()
        changed = editor.update_pointer(x, y)
    return jsonify(ok=True, changed=changed)


@app.route("/api/clear-mask", methods=["POST"])
def clear_mask():
    with state.lock:
        _editor_or_400().clear_mask()
    return jsonify(ok=True)


@app.route("/api/export")
def export_images():
    with state.lock:
        image_url, mask_url = _editor_or_400().export_images()
    return jsonify(image=image_url, mask=mask_url)


# ---------------------------------------------------------------------------
# Generation
# ---------------------------------------------------------------------------

@app.route("/api/generate", methods=["POST"])
def start_generation():
    data = request.get_json(silent=True) or {}
    prompt = str(data.get("prompt", "")).strip()
    try:
        seed = int(data.get("seed", 0))
    except (TypeError, ValueError):
        return jsonify(error="seed must be an integer"), 400

    with state.lock:
        image_url, mask_url = _editor_or_400().export_images()

    task_id = str(uuid.uuid4())[:8]
    task = {
        "status": "running",
        "progress": 0,
        "error": None,
        "cancelled": False,
    }
    client = make_generation_client()

    def run_generation():
        def on_progress(n):
            with state.lock:
                task["progress"] = n

        try:
            result = client.run(
                image_url, mask_url, prompt, seed,
                on_progress=on_progress,
                is_cancelled=lambda: task["cancelled"],
            )
            with state.lock:
                if state.editor is not None:
                    state.editor.update_image(result)
                task["status"] = "done"
        except (GenerationError, InvalidImage) as e:
            logger.warning("Generation %s failed: %s", task_id, e)
            with state.lock:
                task["status"] = "error"
                task["error"] = str(e)
        except Exception as e:
            logger.exception("Generation %s crashed", task_id)
            with state.lock:
                task["status"] = "error"
                task["error"] = str(e)

    t =threading.Thread(target=run_generation, daemon=True)
    task["thread"] = t
    with state.lock:
        state.generate_tasks[task_id] = task
    t.start()

    return jsonify(task_id=task_id)


@app.route("/api/generate/status/<task_id>")
def generation_status(task_id):
    with state.lock:
        task = state.generate_tasks.get(task_id)
        if not task:
            return jsonify(error="Unknown task"), 404
        # Finished tasks are forgotten once their outcome has been reported.
        if task["status"] != "running":
            del state.generate_tasks[task_id]
        return jsonify(
            status=task["status"],
            progress=task["progress"],
            error=task["error"],
        )


@app.route("/api/generate/cancel/<task_id>", methods=["POST"])
def cancel_generation(task_id):
    with state.lock:
        task = state.generate_tasks.get(task_id)
        if not task:
            return jsonify(error="Unknown task"), 404
        task["cancelled"] = True
    return jsonify(ok=True)


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(name)s] %(message)s")
    port = int(os.environ.get("PORT", 5000))
    debug = os.environ.get("FLASK_DEBUG", "0") == "1"
    logger.info("Mask Painter Web - http://localhost:%d", port)
    app.run(host="127.0.0.1", port=port, debug=debug)
