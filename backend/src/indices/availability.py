"""Existence probes summarising which related data a donor has."""

from __future__ import annotations

from typing import Callable, Iterable

from sqlalchemy import select
from sqlalchemy.orm import Session
from sqlalchemy.sql import Select

from domain.schema import AnalysedSample, BulkExpression, ClinicalData, ImageType, Specimen, Treatment
from domain.variants import CNV, SSM, SV, VariantKind

from . import repository
from .models import DataIndex


SessionFactory = Callable[[], Session]


def _exists(session_factory: SessionFactory, stmt: Select) -> bool:
    """Run ``SELECT EXISTS(stmt)`` in its own session."""
    with session_factory() as session:
        return bool(session.scalar(select(stmt.exists())))


def check_variants(session_factory: SessionFactory, kind: VariantKind, specimen_ids: Iterable[int]) -> bool:
    """Whether any variant of ``kind`` was called in an analysis of the given specimens."""
    specimen_ids = list(specimen_ids)
    if not specimen_ids:
        return False
    stmt = (
        select(kind.entry.entity_id)
        .join(AnalysedSample, AnalysedSample.id == kind.entry.analysed_sample_id)
        .where(AnalysedSample.target_sample_id.in_(specimen_ids))
    )
    return _exists(session_factory, stmt)


def check_gene_exp(session_factory: SessionFactory, specimen_ids: Iterable[int]) -> bool:
    """Whether bulk gene expression was measured for any of the given specimens."""
    specimen_ids = list(specimen_ids)
    if not specimen_ids:
        return False
    stmt = (
        select(BulkExpression.entity_id)
        .join(AnalysedSample, AnalysedSample.id == BulkExpression.analysed_sample_id)
        .where(AnalysedSample.target_sample_id.in_(specimen_ids))
    )
    return _exists(session_factory, stmt)


def build_data_index(session_factory: SessionFactory, donor_id: int, image_type: ImageType) -> DataIndex:
    """
    Build the data availability summary for an image of ``image_type``.

    ``mris`` and ``cts`` reflect the image being indexed, not every image the
    donor has. Single cell expression is not tracked for images and is always
    false.
    """
    with session_factory() as session:
        specimen_ids = repository.get_related_specimen_ids(session, [donor_id])

    imaging_specimens = (
        select(Specimen.id)
        .where(Specimen.donor_id == donor_id)
        .where(repository.is_image_related_specimen())
    )

    return DataIndex(
        donors=True,
        clinical=_exists(session_factory, select(ClinicalData.donor_id).where(ClinicalData.donor_id == donor_id)),
        treatments=_exists(session_factory, select(Treatment.id).where(Treatment.donor_id == donor_id)),
        mris=image_type == ImageType.MRI,
        cts=image_type == ImageType.CT,
        materials=_exists(session_factory, imaging_specimens),
        materials_molecular=_exists(session_factory, imaging_specimens.where(Specimen.molecular_data.has())),
        ssms=check_variants(session_factory, SSM, specimen_ids),
        cnvs=check_variants(session_factory, CNV, specimen_ids),
        svs=check_variants(session_factory, SV, specimen_ids),
        gene_exp=check_gene_exp(session_factory, specimen_ids),
        gene_exp_sc=False,
    )
