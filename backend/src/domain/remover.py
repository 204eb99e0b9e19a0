"""Deletion of image rows from the domain store."""

from __future__ import annotations

import logging
from typing import Callable, Optional

from sqlalchemy.orm import Session

from db.session import session_scope

from .schema import Image


logger = logging.getLogger(__name__)


class ImagesDataRemover:
    def __init__(self, session_factory: Optional[Callable[[], Session]] = None) -> None:
        self._session_factory = session_factory

    def delete(self, image_id: int) -> bool:
        """Delete an image with its modality record. Returns ``False`` if it was already gone."""
        with session_scope(self._session_factory) as session:
            image = session.get(Image, image_id)
            if image is None:
                return False
            session.delete(image)
        logger.info("Deleted image %s", image_id)
        return True
