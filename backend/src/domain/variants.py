"""Descriptors tying each variant kind to its entity, occurrence and gene tables."""

from __future__ import annotations

from dataclasses import dataclass

from .schema import (
    CnvAffectedGene,
    CnvVariant,
    CnvVariantEntry,
    SsmAffectedGene,
    SsmVariant,
    SsmVariantEntry,
    SvAffectedGene,
    SvVariant,
    SvVariantEntry,
)


@dataclass(frozen=True)
class VariantKind:
    """A variant kind: canonical variant table, per-sample entry table and affected genes."""

    name: str
    variant: type
    entry: type
    affected_gene: type


SSM = VariantKind("ssm", SsmVariant, SsmVariantEntry, SsmAffectedGene)
CNV = VariantKind("cnv", CnvVariant, CnvVariantEntry, CnvAffectedGene)
SV = VariantKind("sv", SvVariant, SvVariantEntry, SvAffectedGene)

VARIANT_KINDS: tuple[VariantKind, ...] = (SSM, CNV, SV)
