"""Client for the remote generation service: submit image + mask, poll for the result."""

import logging
import time
from typing import Callable, Optional

import requests
from PIL import Image

from models.editor_config import EditorConfig
from models.errors import GenerationError, InvalidImage
from utils.image_io import DATA_URL_PREFIX, data_url_to_image

logger = logging.getLogger(__name__)


class GenerationClient:
    """Talks to the generation HTTP API.

    Protocol: POST {base_url}/generate with JSON {image, mask, prompt, seed}
    returns JSON {"url": poll_url}. GET poll_url returns plain text, either an
    integer percentage or the finished image as a data URL.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        poll_interval: float = 1.0,
        max_attempts: int = 600,
        session: Optional[requests.Session] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.poll_interval = poll_interval
        self.max_attempts = max_attempts
        self.session = session or requests.Session()
        self._sleep = sleep

    @classmethod
    def from_config(cls, config: EditorConfig, **kwargs) -> "GenerationClient":
        return cls(
            config.generation_url,
            timeout=config.request_timeout_sec,
            poll_interval=config.poll_interval_sec,
            max_attempts=config.max_poll_attempts,
            **kwargs,
        )

    def submit(self, image_url: str, mask_url: str, prompt: str, seed: int) -> str:
        """Upload both payloads and return the URL to poll."""
        payload = {"image": image_url, "mask": mask_url, "prompt": prompt, "seed": int(seed)}
        try:
            response = self.session.post(
                f"{self.base_url}/generate", json=payload, timeout=self.timeout
            )
            response.raise_for_status()
            data = response.json()
        except (requests.RequestException, ValueError) as e:
            raise GenerationError(f"Could not submit generation request: {e}") from e

        poll_url = data.get("url") if isinstance(data, dict) else None
        if not poll_url:
            raise GenerationError("Generation service did not return a poll URL")
        logger.info("Submitted generation request (seed=%s), polling %s", seed, poll_url)
        return poll_url

    def check_progress(self, poll_url: str) -> str:
        """Return the raw progress text: a percentage or a data URL."""
        try:
            response = self.session.get(poll_url, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise GenerationError(f"Could not check generation progress: {e}") from e
        return response.text.strip()

    def run(
        self,
        image_url: str,
        mask_url: str,
        prompt: str,
        seed: int,
        on_progress: Optional[Callable[[int], None]] = None,
        is_cancelled: Optional[Callable[[], bool]] = None,
    ) -> Image.Image:
        """Submit and poll until the finished image arrives."""
        poll_url = self.submit(image_url, mask_url, prompt, seed)

        for attempt in range(self.max_attempts):
            if is_cancelled and is_cancelled():
                raise GenerationError("Generation cancelled")

            progress = self.check_progress(poll_url)
            if progress.startswith(DATA_URL_PREFIX):
                if on_progress:
                    on_progress(100)
                try:
                    return data_url_to_image(progress)
                except InvalidImage as e:
                    raise GenerationError(f"Generation service returned a bad image: {e}") from e

            try:
                percent = int(float(progress))
            except (ValueError, OverflowError):
                raise GenerationError(
                    f"Unexpected progress response: {progress[:80]!r}"
                ) from None
            if on_progress:
                on_progress(max(0, min(100, percent)))

            self._sleep(self.poll_interval)

        raise GenerationError(
            f"Generation did not finish after {self.max_attempts} polls"
        )

    def generate(self, editor, prompt: str, seed: int,
                 on_progress: Optional[Callable[[int], None]] = None,
                 is_cancelled: Optional[Callable[[], bool]] = None) -> Image.Image:
        """Export the editor's image and mask, then run a generation with them."""
        image_url, mask_url = editor.export_images()
        return self.run(image_url, mask_url, prompt, seed, on_progress, is_cancelled)
