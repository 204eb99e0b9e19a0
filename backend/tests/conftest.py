from __future__ import annotations

import os

os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")
os.environ.setdefault("INDEX_SINK", "memory")
os.environ.setdefault("INDEXING_ENABLED", "false")

from datetime import date  # noqa: E402
from typing import Optional  # noqa: E402

import pytest  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from db.lifecycle import ensure_schema  # noqa: E402
from domain import schema  # noqa: E402
from domain.variants import VariantKind  # noqa: E402


@pytest.fixture
def session_factory():
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        future=True,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    ensure_schema(engine)
    SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False, future=True)
    yield SessionLocal
    engine.dispose()


class Seeder:
    """Inserts domain rows for tests and returns their ids."""

    def __init__(self, session_factory) -> None:
        self._session_factory = session_factory

    def _add(self, *rows):
        with self._session_factory() as session:
            session.add_all(rows)
            session.commit()
        return rows[0]

    def donor(
        self,
        reference_id: str = "DO1",
        *,
        clinical: Optional[dict] = None,
        treatments: Optional[list[dict]] = None,
        studies: Optional[list[str]] = None,
        projects: Optional[list[str]] = None,
    ) -> int:
        with self._session_factory() as session:
            donor = schema.Donor(reference_id=reference_id, mta_protected=False)
            if clinical is not None:
                donor.clinical_data = schema.ClinicalData(**clinical)
            for treatment in treatments or []:
                donor.treatments.append(schema.Treatment(**treatment))
            for name in studies or []:
                donor.studies.append(schema.Study(name=name))
            for name in projects or []:
                donor.projects.append(schema.Project(name=name))
            session.add(donor)
            session.commit()
            return donor.id

    def image(
        self,
        donor_id: int,
        *,
        type_id: schema.ImageType = schema.ImageType.MRI,
        reference_id: str = "IMG1",
        scanning_date: Optional[date] = None,
        scanning_day: Optional[int] = None,
        features: Optional[dict] = None,
    ) -> int:
        image = schema.Image(
            donor_id=donor_id,
            reference_id=reference_id,
            type_id=type_id,
            scanning_date=scanning_date,
            scanning_day=scanning_day,
        )
        if type_id == schema.ImageType.MRI:
            image.mri_image = schema.MriImage(**(features or {}))
        else:
            image.ct_image = schema.CtImage(**(features or {}))
        return self._add(image).id

    def specimen(
        self,
        donor_id: int,
        *,
        reference_id: str = "SP1",
        type_id: schema.SpecimenType = schema.SpecimenType.MATERIAL,
        material_type: Optional[schema.MaterialType] = schema.MaterialType.TUMOR,
        molecular: Optional[dict] = None,
        creation_date: Optional[date] = None,
    ) -> int:
        specimen = schema.Specimen(
            donor_id=donor_id,
            reference_id=reference_id,
            type_id=type_id,
            creation_date=creation_date,
        )
        if type_id == schema.SpecimenType.MATERIAL:
            specimen.material = schema.Material(type_id=material_type, fixation_type="FFPE")
        if molecular is not None:
            specimen.molecular_data = schema.MolecularData(**molecular)
        return self._add(specimen).id

    def analysed_sample(
        self,
        specimen_id: int,
        *,
        type_id: schema.AnalysisType = schema.AnalysisType.WGS,
        analysis_date: Optional[date] = None,
    ) -> int:
        with self._session_factory() as session:
            analysis = schema.Analysis(type_id=type_id, analysis_date=analysis_date, reference_id=f"AN{specimen_id}")
            session.add(analysis)
            session.flush()
            sample = schema.AnalysedSample(analysis_id=analysis.id, target_sample_id=specimen_id)
            session.add(sample)
            session.commit()
            return sample.id

    def gene(self, stable_id: str) -> int:
        return self._add(schema.Gene(stable_id=stable_id, symbol=stable_id)).id

    def variant(self, kind: VariantKind, *, start: int = 100, gene_ids: tuple[int, ...] = ()) -> int:
        if kind.name == "sv":
            variant = kind.variant(chromosome="1", start=start, other_chromosome="2", other_start=start)
        else:
            variant = kind.variant(chromosome="1", start=start, end=start + 1)
        variant_id = self._add(variant).id
        for gene_id in gene_ids:
            self._add(kind.affected_gene(variant_id=variant_id, gene_id=gene_id))
        return variant_id

    def variant_entry(self, kind: VariantKind, sample_id: int, variant_id: int) -> None:
        self._add(kind.entry(analysed_sample_id=sample_id, entity_id=variant_id))

    def expression(self, sample_id: int, gene_id: int) -> None:
        self._add(schema.BulkExpression(analysed_sample_id=sample_id, entity_id=gene_id, reads=10, tpm=1.5))


@pytest.fixture
def seed(session_factory) -> Seeder:
    return Seeder(session_factory)
