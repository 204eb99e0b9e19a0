"""Read-only queries backing image index creation.

Every function takes an open session, issues its query and returns detached
pydantic snapshots or plain id lists. Nothing here adds, flushes or commits.
"""

from __future__ import annotations

from typing import Iterable, Optional

from sqlalchemy import and_, select, union
from sqlalchemy.orm import Session, selectinload
from sqlalchemy.sql import ColumnElement

from domain.models import AnalysedSampleDTO, DonorDTO, ImageDTO, SpecimenDTO
from domain.schema import (
    AnalysedSample,
    Donor,
    Image,
    Material,
    MaterialType,
    Specimen,
    SpecimenType,
)
from domain.variants import VARIANT_KINDS, VariantKind


def is_image_related_specimen() -> ColumnElement[bool]:
    """Predicate selecting specimens pertinent to imaging: tumor tissue materials."""
    return and_(
        Specimen.type_id == SpecimenType.MATERIAL,
        Specimen.material.has(Material.type_id == MaterialType.TUMOR),
    )


# =============================================================================
# Aggregates
# =============================================================================


def find_image(session: Session, image_id: int) -> Optional[ImageDTO]:
    """Load an image with its modality record, donor and donor clinical data."""
    stmt = (
        select(Image)
        .where(Image.id == image_id)
        .options(
            selectinload(Image.mri_image),
            selectinload(Image.ct_image),
            selectinload(Image.donor).selectinload(Donor.clinical_data),
        )
    )
    image = session.scalar(stmt)
    if image is None:
        return None
    return ImageDTO.model_validate(image)


def find_donor(session: Session, donor_id: int) -> Optional[DonorDTO]:
    """Load a donor with clinical data, treatments, studies and projects."""
    stmt = (
        select(Donor)
        .where(Donor.id == donor_id)
        .options(
            selectinload(Donor.clinical_data),
            selectinload(Donor.treatments),
            selectinload(Donor.studies),
            selectinload(Donor.projects),
        )
    )
    donor = session.scalar(stmt)
    if donor is None:
        return None
    return DonorDTO.model_validate(donor)


def list_imaging_specimens(session: Session, donor_id: int) -> list[SpecimenDTO]:
    stmt = (
        select(Specimen)
        .where(Specimen.donor_id == donor_id)
        .where(is_image_related_specimen())
        .options(selectinload(Specimen.material), selectinload(Specimen.molecular_data))
        .order_by(Specimen.id)
    )
    return [SpecimenDTO.model_validate(specimen) for specimen in session.scalars(stmt)]


def list_analyses(session: Session, specimen_id: int) -> list[AnalysedSampleDTO]:
    stmt = (
        select(AnalysedSample)
        .where(AnalysedSample.target_sample_id == specimen_id)
        .options(selectinload(AnalysedSample.analysis))
        .order_by(AnalysedSample.id)
    )
    return [AnalysedSampleDTO.model_validate(sample) for sample in session.scalars(stmt)]


# =============================================================================
# Related identifiers
# =============================================================================


def get_related_specimen_ids(session: Session, donor_ids: Iterable[int]) -> list[int]:
    """Ids of the imaging-relevant specimens belonging to the given donors."""
    donor_ids = list(donor_ids)
    if not donor_ids:
        return []
    stmt = (
        select(Specimen.id)
        .where(Specimen.donor_id.in_(donor_ids))
        .where(is_image_related_specimen())
        .order_by(Specimen.id)
    )
    return list(session.scalars(stmt))


def _variant_entries_of(kind: VariantKind, specimen_ids: list[int]):
    return (
        select(kind.entry.entity_id)
        .join(AnalysedSample, AnalysedSample.id == kind.entry.analysed_sample_id)
        .where(AnalysedSample.target_sample_id.in_(specimen_ids))
    )


def get_related_variant_ids(session: Session, kind: VariantKind, specimen_ids: Iterable[int]) -> list[int]:
    """Distinct ids of variants of ``kind`` called in any analysis of the given specimens."""
    specimen_ids = list(specimen_ids)
    if not specimen_ids:
        return []
    stmt = _variant_entries_of(kind, specimen_ids).distinct()
    return list(session.scalars(stmt))


def get_variant_related_gene_ids(session: Session, specimen_ids: Iterable[int]) -> list[int]:
    """Distinct ids of genes affected by any SSM, CNV or SV found in the given specimens."""
    specimen_ids = list(specimen_ids)
    if not specimen_ids:
        return []
    selects = []
    for kind in VARIANT_KINDS:
        variant_ids = _variant_entries_of(kind, specimen_ids)
        selects.append(
            select(kind.affected_gene.gene_id).where(kind.affected_gene.variant_id.in_(variant_ids))
        )
    return list(session.scalars(union(*selects)))
