"""A local folder of images used when the picture of the day is unavailable."""

from __future__ import annotations

import logging
import os
import random
from typing import Optional

from .apod import ApodData, _looks_like_image

log = logging.getLogger(__name__)

_IMAGE_SUFFIXES = (".png", ".jpg", ".jpeg", ".bmp", ".webp")


class DefaultImageHandler:
    """Picks a random image from a folder, with a random title and description."""

    TITLES = (
        "Starlit Horizons",
        "Cosmic Dawn",
        "Galactic Mystery",
        "Nebula Dreams",
        "Journey Through Space",
    )

    DESCRIPTIONS = (
        "A breathtaking look into the vast unknown of space.",
        "A rare celestial moment captured from the depths of the universe.",
        "An awe-inspiring phenomenon illuminating the cosmic dark.",
        "Colors and patterns revealing the life cycle of distant stars.",
        "A moment frozen in time, light-years away from Earth.",
    )

    def __init__(self, image_folder: str = "", rng: Optional[random.Random] = None) -> None:
        self.image_folder = image_folder
        self.rng = rng if rng is not None else random.Random()

    def set_image_folder(self, folder: str) -> bool:
        """Use another folder; False if it is the folder already in use."""
        if folder == self.image_folder:
            return False
        self.image_folder = folder
        log.info("Set to the %s as default Images Folder", folder)
        return True

    def is_image_folder_accessible(self) -> bool:
        """Whether the folder exists."""
        return os.path.isdir(self.image_folder or ".")

    def _image_files(self) -> list[str]:
        folder = self.image_folder or "."
        names = [
            name
            for name in os.listdir(folder)
            if not name.startswith(".")
            and name.lower().endswith(_IMAGE_SUFFIXES)
            and os.path.isfile(os.path.join(folder, name))
        ]
        return [os.path.abspath(os.path.join(folder, name)) for name in sorted(names, key=str.lower)]

    def random_apod(self) -> ApodData:
        """A random image from the folder; empty data if there is none."""
        data = ApodData()
        if not self.is_image_folder_accessible():
            log.warning("Image folder does not exist: %s", self.image_folder)
            return data

        files = self._image_files()
        if not files:
            log.warning("No image files found in: %s", self.image_folder)
            return data

        chosen = files[self.rng.randrange(len(files))]
        try:
            with open(chosen, "rb") as handle:
                image = handle.read()
        except OSError:
            image = b""
        if _looks_like_image(image):
            data.image = image
            data.image_url = chosen

        if self.TITLES:
            data.title = self.TITLES[self.rng.randrange(len(self.TITLES))]
        if self.DESCRIPTIONS:
            data.descriptions = self.DESCRIPTIONS[self.rng.randrange(len(self.DESCRIPTIONS))]
        return data