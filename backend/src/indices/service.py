"""Assembly of image index documents from the domain store."""

from __future__ import annotations

import logging
from datetime import date
from typing import Any, Callable, Optional, TypeVar

from sqlalchemy.orm import Session

from domain.models import ImageDTO

from . import repository
from .availability import build_data_index
from .mappers import map_analysis, map_donor, map_image, map_specimen
from .models import AnalysisIndex, DonorIndex, ImageIndex, SpecimenIndex
from .stats import load_genomic_stats


logger = logging.getLogger(__name__)

T = TypeVar("T")


class ImageIndexCreationService:
    """Builds one denormalized document per image id.

    Every lookup opens its own session from ``session_factory`` and closes it
    before the next one, so no transaction spans a whole build. The returned
    document is a plain pydantic tree with no ties to the ORM.
    """

    def __init__(self, session_factory: Optional[Callable[[], Session]] = None) -> None:
        self._session_factory = session_factory

    def _get_session_factory(self) -> Callable[[], Session]:
        if self._session_factory is None:
            from db.session import SessionLocal

            self._session_factory = SessionLocal
        return self._session_factory

    def _query(self, fn: Callable[..., T], *args: Any) -> T:
        with self._get_session_factory()() as session:
            return fn(session, *args)

    def create_index(self, key: Any) -> Optional[ImageIndex]:
        """Build the document for image ``key``; ``None`` when the image does not exist."""
        image_id = int(key)
        image = self._query(repository.find_image, image_id)
        if image is None:
            logger.debug("Image %s not found, nothing to index", image_id)
            return None
        return self._create_image_index(image)

    def _create_image_index(self, image: ImageDTO) -> ImageIndex:
        clinical = image.donor.clinical_data if image.donor else None
        diagnosis_date = clinical.diagnosis_date if clinical else None

        index = map_image(image, diagnosis_date)
        index.donor_id = image.donor_id
        index.donor = self._create_donor_index(image.donor_id)
        index.specimens = self._create_specimen_indices(image.donor_id, diagnosis_date)
        index.data = build_data_index(self._get_session_factory(), image.donor_id, image.type_id)

        stats = load_genomic_stats(self._get_session_factory(), image.donor_id)
        index.number_of_genes = stats.number_of_genes
        index.number_of_ssms = stats.number_of_ssms
        index.number_of_cnvs = stats.number_of_cnvs
        index.number_of_svs = stats.number_of_svs

        return index

    def _create_donor_index(self, donor_id: int) -> Optional[DonorIndex]:
        donor = self._query(repository.find_donor, donor_id)
        if donor is None:
            return None
        return map_donor(donor)

    def _create_specimen_indices(self, donor_id: int, diagnosis_date: Optional[date]) -> Optional[list[SpecimenIndex]]:
        specimens = self._query(repository.list_imaging_specimens, donor_id)
        indices = []
        for specimen in specimens:
            index = map_specimen(specimen, diagnosis_date)
            index.analyses = self._create_analysis_indices(specimen.id, diagnosis_date)
            indices.append(index)
        return indices or None

    def _create_analysis_indices(self, specimen_id: int, diagnosis_date: Optional[date]) -> Optional[list[AnalysisIndex]]:
        samples = self._query(repository.list_analyses, specimen_id)
        indices = [map_analysis(sample, diagnosis_date) for sample in samples]
        return indices or None
