"""ORM models for the donor, imaging, specimen and genome tables."""

from __future__ import annotations

import enum
from datetime import date
from typing import Optional

from sqlalchemy import JSON, Boolean, Date, Double, Enum, ForeignKey, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    pass


class ImageType(str, enum.Enum):
    MRI = "MRI"
    CT = "CT"


class SpecimenType(str, enum.Enum):
    MATERIAL = "Material"
    LINE = "Line"
    ORGANOID = "Organoid"
    XENOGRAFT = "Xenograft"


class MaterialType(str, enum.Enum):
    NORMAL = "Normal"
    TUMOR = "Tumor"


class AnalysisType(str, enum.Enum):
    WGS = "WGS"
    WES = "WES"
    RNASEQ = "RNASeq"
    RNASEQ_SC = "RNASeqSc"


class Sex(str, enum.Enum):
    FEMALE = "Female"
    MALE = "Male"
    OTHER = "Other"


# =============================================================================
# Donors
# =============================================================================


class Donor(Base):
    __tablename__ = "donors"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    reference_id: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    mta_protected: Mapped[Optional[bool]] = mapped_column(Boolean, nullable=True)

    clinical_data: Mapped[Optional[ClinicalData]] = relationship(
        "ClinicalData", back_populates="donor", uselist=False, cascade="all, delete-orphan"
    )
    treatments: Mapped[list[Treatment]] = relationship(
        "Treatment", back_populates="donor", cascade="all, delete-orphan", order_by="Treatment.id"
    )
    studies: Mapped[list[Study]] = relationship("Study", secondary="study_donors", order_by="Study.id")
    projects: Mapped[list[Project]] = relationship("Project", secondary="project_donors", order_by="Project.id")


class ClinicalData(Base):
    __tablename__ = "clinical_data"

    donor_id: Mapped[int] = mapped_column(ForeignKey("donors.id", ondelete="CASCADE"), primary_key=True)
    sex: Mapped[Optional[Sex]] = mapped_column(Enum(Sex), nullable=True)
    enrollment_age: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    diagnosis: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    diagnosis_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    primary_site: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    localization: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    vital_status: Mapped[Optional[bool]] = mapped_column(Boolean, nullable=True)
    vital_status_change_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    vital_status_change_day: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    progression_status: Mapped[Optional[bool]] = mapped_column(Boolean, nullable=True)
    progression_status_change_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    progression_status_change_day: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    kps_baseline: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    steroids_reactive: Mapped[Optional[bool]] = mapped_column(Boolean, nullable=True)

    donor: Mapped[Donor] = relationship("Donor", back_populates="clinical_data")


class Treatment(Base):
    __tablename__ = "treatments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    donor_id: Mapped[int] = mapped_column(ForeignKey("donors.id", ondelete="CASCADE"), nullable=False, index=True)
    therapy: Mapped[str] = mapped_column(String(255), nullable=False)
    details: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    start_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    start_day: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    end_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    duration_days: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    results: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    donor: Mapped[Donor] = relationship("Donor", back_populates="treatments")


class Study(Base):
    __tablename__ = "studies"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)


class StudyDonor(Base):
    __tablename__ = "study_donors"

    study_id: Mapped[int] = mapped_column(ForeignKey("studies.id", ondelete="CASCADE"), primary_key=True)
    donor_id: Mapped[int] = mapped_column(ForeignKey("donors.id", ondelete="CASCADE"), primary_key=True)


class Project(Base):
    __tablename__ = "projects"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)


class ProjectDonor(Base):
    __tablename__ = "project_donors"

    project_id: Mapped[int] = mapped_column(ForeignKey("projects.id", ondelete="CASCADE"), primary_key=True)
    donor_id: Mapped[int] = mapped_column(ForeignKey("donors.id", ondelete="CASCADE"), primary_key=True)


# =============================================================================
# Images
# =============================================================================


class Image(Base):
    __tablename__ = "images"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    donor_id: Mapped[int] = mapped_column(ForeignKey("donors.id", ondelete="CASCADE"), nullable=False, index=True)
    reference_id: Mapped[str] = mapped_column(String(255), nullable=False)
    type_id: Mapped[ImageType] = mapped_column(Enum(ImageType), nullable=False)
    scanning_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    scanning_day: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    donor: Mapped[Donor] = relationship("Donor")
    mri_image: Mapped[Optional[MriImage]] = relationship(
        "MriImage", uselist=False, cascade="all, delete-orphan"
    )
    ct_image: Mapped[Optional[CtImage]] = relationship(
        "CtImage", uselist=False, cascade="all, delete-orphan"
    )


class MriImage(Base):
    __tablename__ = "mri_images"

    image_id: Mapped[int] = mapped_column(ForeignKey("images.id", ondelete="CASCADE"), primary_key=True)
    whole_tumor: Mapped[Optional[float]] = mapped_column(Double, nullable=True)
    contrast_enhancing: Mapped[Optional[float]] = mapped_column(Double, nullable=True)
    non_contrast_enhancing: Mapped[Optional[float]] = mapped_column(Double, nullable=True)
    median_adc_tumor: Mapped[Optional[float]] = mapped_column(Double, nullable=True)
    median_adc_ce: Mapped[Optional[float]] = mapped_column(Double, nullable=True)
    median_adc_edema: Mapped[Optional[float]] = mapped_column(Double, nullable=True)
    median_cbf_tumor: Mapped[Optional[float]] = mapped_column(Double, nullable=True)
    median_cbv_tumor: Mapped[Optional[float]] = mapped_column(Double, nullable=True)
    median_mtt_tumor: Mapped[Optional[float]] = mapped_column(Double, nullable=True)


class CtImage(Base):
    __tablename__ = "ct_images"

    image_id: Mapped[int] = mapped_column(ForeignKey("images.id", ondelete="CASCADE"), primary_key=True)
    whole_tumor: Mapped[Optional[float]] = mapped_column(Double, nullable=True)
    contrast_enhancing: Mapped[Optional[float]] = mapped_column(Double, nullable=True)
    non_contrast_enhancing: Mapped[Optional[float]] = mapped_column(Double, nullable=True)


# =============================================================================
# Specimens
# =============================================================================


class Specimen(Base):
    __tablename__ = "specimens"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    donor_id: Mapped[int] = mapped_column(ForeignKey("donors.id", ondelete="CASCADE"), nullable=False, index=True)
    parent_id: Mapped[Optional[int]] = mapped_column(ForeignKey("specimens.id"), nullable=True)
    reference_id: Mapped[str] = mapped_column(String(255), nullable=False)
    type_id: Mapped[SpecimenType] = mapped_column(Enum(SpecimenType), nullable=False)
    creation_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    creation_day: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    material: Mapped[Optional[Material]] = relationship(
        "Material", uselist=False, cascade="all, delete-orphan"
    )
    molecular_data: Mapped[Optional[MolecularData]] = relationship(
        "MolecularData", uselist=False, cascade="all, delete-orphan"
    )


class Material(Base):
    __tablename__ = "materials"

    specimen_id: Mapped[int] = mapped_column(ForeignKey("specimens.id", ondelete="CASCADE"), primary_key=True)
    type_id: Mapped[Optional[MaterialType]] = mapped_column(Enum(MaterialType), nullable=True)
    fixation_type: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    tumor_type: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    tumor_grade: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    source: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)


class MolecularData(Base):
    __tablename__ = "specimen_molecular_data"

    specimen_id: Mapped[int] = mapped_column(ForeignKey("specimens.id", ondelete="CASCADE"), primary_key=True)
    mgmt_status: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    idh_status: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    idh_mutation: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    gene_knockouts: Mapped[Optional[list]] = mapped_column(JSON, nullable=True)


# =============================================================================
# Analyses
# =============================================================================


class Analysis(Base):
    __tablename__ = "analyses"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    reference_id: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    type_id: Mapped[AnalysisType] = mapped_column(Enum(AnalysisType), nullable=False)
    analysis_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    analysis_day: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    parameters: Mapped[Optional[dict]] = mapped_column(JSON, nullable=True)


class AnalysedSample(Base):
    __tablename__ = "analysed_samples"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    analysis_id: Mapped[int] = mapped_column(ForeignKey("analyses.id", ondelete="CASCADE"), nullable=False)
    target_sample_id: Mapped[int] = mapped_column(
        ForeignKey("specimens.id", ondelete="CASCADE"), nullable=False, index=True
    )
    matched_sample_id: Mapped[Optional[int]] = mapped_column(ForeignKey("specimens.id"), nullable=True)

    analysis: Mapped[Analysis] = relationship("Analysis")


# =============================================================================
# Genome
# =============================================================================


class Gene(Base):
    __tablename__ = "genes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    stable_id: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    symbol: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)


class SsmVariant(Base):
    __tablename__ = "ssm_variants"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    chromosome: Mapped[str] = mapped_column(String(8), nullable=False)
    start: Mapped[int] = mapped_column(Integer, nullable=False)
    end: Mapped[int] = mapped_column(Integer, nullable=False)
    ref: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    alt: Mapped[Optional[str]] = mapped_column(Text, nullable=True)


class SsmVariantEntry(Base):
    __tablename__ = "ssm_variant_entries"

    analysed_sample_id: Mapped[int] = mapped_column(
        ForeignKey("analysed_samples.id", ondelete="CASCADE"), primary_key=True
    )
    entity_id: Mapped[int] = mapped_column(ForeignKey("ssm_variants.id", ondelete="CASCADE"), primary_key=True)


class SsmAffectedGene(Base):
    __tablename__ = "ssm_affected_genes"

    variant_id: Mapped[int] = mapped_column(ForeignKey("ssm_variants.id", ondelete="CASCADE"), primary_key=True)
    gene_id: Mapped[int] = mapped_column(ForeignKey("genes.id", ondelete="CASCADE"), primary_key=True)


class CnvVariant(Base):
    __tablename__ = "cnv_variants"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    chromosome: Mapped[str] = mapped_column(String(8), nullable=False)
    start: Mapped[int] = mapped_column(Integer, nullable=False)
    end: Mapped[int] = mapped_column(Integer, nullable=False)
    cna_type: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)


class CnvVariantEntry(Base):
    __tablename__ = "cnv_variant_entries"

    analysed_sample_id: Mapped[int] = mapped_column(
        ForeignKey("analysed_samples.id", ondelete="CASCADE"), primary_key=True
    )
    entity_id: Mapped[int] = mapped_column(ForeignKey("cnv_variants.id", ondelete="CASCADE"), primary_key=True)


class CnvAffectedGene(Base):
    __tablename__ = "cnv_affected_genes"

    variant_id: Mapped[int] = mapped_column(ForeignKey("cnv_variants.id", ondelete="CASCADE"), primary_key=True)
    gene_id: Mapped[int] = mapped_column(ForeignKey("genes.id", ondelete="CASCADE"), primary_key=True)


class SvVariant(Base):
    __tablename__ = "sv_variants"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    chromosome: Mapped[str] = mapped_column(String(8), nullable=False)
    start: Mapped[int] = mapped_column(Integer, nullable=False)
    other_chromosome: Mapped[str] = mapped_column(String(8), nullable=False)
    other_start: Mapped[int] = mapped_column(Integer, nullable=False)
    sv_type: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)


class SvVariantEntry(Base):
    __tablename__ = "sv_variant_entries"

    analysed_sample_id: Mapped[int] = mapped_column(
        ForeignKey("analysed_samples.id", ondelete="CASCADE"), primary_key=True
    )
    entity_id: Mapped[int] = mapped_column(ForeignKey("sv_variants.id", ondelete="CASCADE"), primary_key=True)


class SvAffectedGene(Base):
    __tablename__ = "sv_affected_genes"

    variant_id: Mapped[int] = mapped_column(ForeignKey("sv_variants.id", ondelete="CASCADE"), primary_key=True)
    gene_id: Mapped[int] = mapped_column(ForeignKey("genes.id", ondelete="CASCADE"), primary_key=True)


class BulkExpression(Base):
    __tablename__ = "bulk_expressions"

    analysed_sample_id: Mapped[int] = mapped_column(
        ForeignKey("analysed_samples.id", ondelete="CASCADE"), primary_key=True
    )
    entity_id: Mapped[int] = mapped_column(ForeignKey("genes.id", ondelete="CASCADE"), primary_key=True)
    reads: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    tpm: Mapped[Optional[float]] = mapped_column(Double, nullable=True)
    fpkm: Mapped[Optional[float]] = mapped_column(Double, nullable=True)
