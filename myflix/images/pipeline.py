"""
Resize pipeline for images dropped into the input prefix of the bucket.

Each object key moves through the stages

    RECEIVED -> FILTERED -> FETCHED -> DECODED -> RESIZED -> ENCODED -> STORED -> DONE

or ends in FAILED. Keys outside the input prefix stop after FILTERED with a
"skipped" outcome. Nothing is retried here; a failed result is handed back so
the event source can apply its own retry policy. Reprocessing a key writes
the same output key again.
"""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional
from urllib.parse import unquote_plus

from ..core.config import Settings
from .storage import ObjectStorage
from .transform import decode_image, encode_image, fit_within

logger = logging.getLogger(__name__)


class Stage(str, Enum):
    RECEIVED = "received"
    FILTERED = "filtered"
    FETCHED = "fetched"
    DECODED = "decoded"
    RESIZED = "resized"
    ENCODED = "encoded"
    STORED = "stored"
    DONE = "done"
    FAILED = "failed"


class Outcome(str, Enum):
    DONE = "done"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass
class ResizeResult:
    key: Optional[str]
    outcome: Outcome
    stage: Stage
    message: str
    output_key: Optional[str] = None

    @property
    def status_code(self) -> int:
        return 500 if self.outcome is Outcome.FAILED else 200


def output_key_for(key: str, settings: Settings) -> str:
    return settings.OUTPUT_PREFIX + key.rsplit("/", 1)[-1]


def process_key(key: str, storage: ObjectStorage, settings: Settings) -> ResizeResult:
    logger.info(f"Processing object: {key}")
    if not key.startswith(settings.INPUT_PREFIX):
        logger.info(f"Skipping {key}: not in the '{settings.INPUT_PREFIX}' folder")
        return ResizeResult(key, Outcome.SKIPPED, Stage.FILTERED, "File skipped")

    output_key = output_key_for(key, settings)
    stage = Stage.FILTERED
    try:
        source = storage.get_object(key)
        stage = Stage.FETCHED
        logger.info(f"Fetched {key} ({len(source.body)} bytes, {source.content_type})")

        image = decode_image(source.body)
        image_format = image.format
        stage = Stage.DECODED

        resized = fit_within(image, (settings.RESIZE_WIDTH, settings.RESIZE_HEIGHT))
        stage = Stage.RESIZED
        logger.info(f"Resized {key} from {image.size} to {resized.size}")

        data = encode_image(resized, image_format)
        stage = Stage.ENCODED

        storage.put_object(output_key, data, source.content_type)
        stage = Stage.STORED
    except Exception as e:
        # Any failure ends this invocation; the caller decides about retries
        logger.exception(f"Error processing {key} after stage '{stage.value}'")
        return ResizeResult(key, Outcome.FAILED, Stage.FAILED, f"Error resizing image: {e}")

    logger.info(f"Resized image uploaded successfully to {output_key}")
    return ResizeResult(
        key,
        Outcome.DONE,
        Stage.DONE,
        f"Successfully resized and uploaded {key} to {output_key}",
        output_key=output_key,
    )


def _record_key(record: Dict[str, Any]) -> Optional[str]:
    key = record.get("s3", {}).get("object", {}).get("key")
    return unquote_plus(key) if isinstance(key, str) else None


def handle_event(event: Dict[str, Any], storage: ObjectStorage, settings: Settings) -> Dict[str, Any]:
    """Run every record of an S3 notification through the pipeline"""
    records = event.get("Records") or []
    if not records:
        return {"statusCode": 400, "body": "No records in event"}

    results: List[ResizeResult] = []
    for record in records:
        key = _record_key(record)
        if key is None:
            results.append(ResizeResult(None, Outcome.FAILED, Stage.FAILED, "Record has no object key"))
            continue
        results.append(process_key(key, storage, settings))

    status_code = max(result.status_code for result in results)
    return {
        "statusCode": status_code,
        "body": "; ".join(result.message for result in results),
    }
