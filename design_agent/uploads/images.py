import io
import logging
from pathlib import Path
from PIL import Image, UnidentifiedImageError
from design_agent.errors import ImageProcessingError

logger = logging.getLogger(__name__)

UPLOAD_FOLDERS = ("designs", "training", "brand-elements", "references")
MAX_DIMENSION = 1024
JPEG_QUALITY = 90

def ensure_upload_dirs(root: str | Path) -> list[Path]:
    created = []
    for folder in UPLOAD_FOLDERS:
        path = Path(root) / folder
        path.mkdir(parents=True, exist_ok=True)
        created.append(path)
    logger.info("Upload directories ready under %s", root)
    return created

def process_and_store(data: bytes, filename: str, folder: str = "designs", root: str | Path = "./uploads") -> str:
    """Fit the image inside 1024x1024 (never upscaling), re-encode it as JPEG
    and write it to ``<root>/<folder>/<filename>``. Returns the written path."""
    try:
        with Image.open(io.BytesIO(data)) as img:
            img.load()
            img.thumbnail((MAX_DIMENSION, MAX_DIMENSION))
            if img.mode != "RGB":
                img = img.convert("RGB")
            buf = io.BytesIO()
            img.save(buf, format="JPEG", quality=JPEG_QUALITY)
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as e:
        logger.error("Error processing image %s: %s", filename, e)
        raise ImageProcessingError("Failed to process image") from e

    target_dir = Path(root) / folder
    try:
        target_dir.mkdir(parents=True, exist_ok=True)
        path = target_dir / filename
        path.write_bytes(buf.getvalue())
    except OSError as e:
        logger.error("Error writing image %s: %s", filename, e)
        raise ImageProcessingError("Failed to process image") from e
    return str(path)
