"""Per-donor genomic statistics attached to image index documents."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from sqlalchemy.orm import Session

from domain.variants import CNV, SSM, SV

from . import repository


@dataclass(frozen=True)
class GenomicStats:
    number_of_genes: int = 0
    number_of_ssms: int = 0
    number_of_cnvs: int = 0
    number_of_svs: int = 0


def load_genomic_stats(session_factory: Callable[[], Session], donor_id: int) -> GenomicStats:
    """
    Count the distinct genes and variants found in a donor's imaging specimens.

    Each lookup runs in its own short-lived session. Counts are cardinalities
    of distinct id sets, so a variant called in several samples counts once.

    Args:
        session_factory: Callable returning a new session (e.g. ``SessionLocal``)
        donor_id: Donor whose specimens are inspected

    Returns:
        GenomicStats with gene, SSM, CNV and SV counts
    """
    with session_factory() as session:
        specimen_ids = repository.get_related_specimen_ids(session, [donor_id])

    if not specimen_ids:
        return GenomicStats()

    with session_factory() as session:
        ssm_ids = repository.get_related_variant_ids(session, SSM, specimen_ids)
    with session_factory() as session:
        cnv_ids = repository.get_related_variant_ids(session, CNV, specimen_ids)
    with session_factory() as session:
        sv_ids = repository.get_related_variant_ids(session, SV, specimen_ids)
    with session_factory() as session:
        gene_ids = repository.get_variant_related_gene_ids(session, specimen_ids)

    return GenomicStats(
        number_of_genes=len(set(gene_ids)),
        number_of_ssms=len(set(ssm_ids)),
        number_of_cnvs=len(set(cnv_ids)),
        number_of_svs=len(set(sv_ids)),
    )
