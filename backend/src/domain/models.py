"""Detached snapshots of domain rows returned by the read repositories."""

from __future__ import annotations

from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict

from .schema import AnalysisType, ImageType, MaterialType, Sex, SpecimenType


class _Snapshot(BaseModel):
    model_config = ConfigDict(from_attributes=True, frozen=True)


class ClinicalDataDTO(_Snapshot):
    sex: Optional[Sex] = None
    enrollment_age: Optional[int] = None
    diagnosis: Optional[str] = None
    diagnosis_date: Optional[date] = None
    primary_site: Optional[str] = None
    localization: Optional[str] = None
    vital_status: Optional[bool] = None
    vital_status_change_date: Optional[date] = None
    vital_status_change_day: Optional[int] = None
    progression_status: Optional[bool] = None
    progression_status_change_date: Optional[date] = None
    progression_status_change_day: Optional[int] = None
    kps_baseline: Optional[int] = None
    steroids_reactive: Optional[bool] = None


class TreatmentDTO(_Snapshot):
    id: int
    therapy: str
    details: Optional[str] = None
    start_date: Optional[date] = None
    start_day: Optional[int] = None
    end_date: Optional[date] = None
    duration_days: Optional[int] = None
    results: Optional[str] = None


class StudyDTO(_Snapshot):
    id: int
    name: str


class ProjectDTO(_Snapshot):
    id: int
    name: str


class DonorDTO(_Snapshot):
    id: int
    reference_id: str
    mta_protected: Optional[bool] = None
    clinical_data: Optional[ClinicalDataDTO] = None
    treatments: list[TreatmentDTO] = []
    studies: list[StudyDTO] = []
    projects: list[ProjectDTO] = []


class DonorSummaryDTO(_Snapshot):
    """Donor with clinical data only, as loaded alongside an image."""

    id: int
    reference_id: str
    clinical_data: Optional[ClinicalDataDTO] = None


class MriImageDTO(_Snapshot):
    whole_tumor: Optional[float] = None
    contrast_enhancing: Optional[float] = None
    non_contrast_enhancing: Optional[float] = None
    median_adc_tumor: Optional[float] = None
    median_adc_ce: Optional[float] = None
    median_adc_edema: Optional[float] = None
    median_cbf_tumor: Optional[float] = None
    median_cbv_tumor: Optional[float] = None
    median_mtt_tumor: Optional[float] = None


class CtImageDTO(_Snapshot):
    whole_tumor: Optional[float] = None
    contrast_enhancing: Optional[float] = None
    non_contrast_enhancing: Optional[float] = None


class ImageDTO(_Snapshot):
    id: int
    donor_id: int
    reference_id: str
    type_id: ImageType
    scanning_date: Optional[date] = None
    scanning_day: Optional[int] = None
    donor: Optional[DonorSummaryDTO] = None
    mri_image: Optional[MriImageDTO] = None
    ct_image: Optional[CtImageDTO] = None


class MaterialDTO(_Snapshot):
    type_id: Optional[MaterialType] = None
    fixation_type: Optional[str] = None
    tumor_type: Optional[str] = None
    tumor_grade: Optional[int] = None
    source: Optional[str] = None


class MolecularDataDTO(_Snapshot):
    mgmt_status: Optional[str] = None
    idh_status: Optional[str] = None
    idh_mutation: Optional[str] = None
    gene_knockouts: Optional[list[str]] = None


class SpecimenDTO(_Snapshot):
    id: int
    donor_id: int
    parent_id: Optional[int] = None
    reference_id: str
    type_id: SpecimenType
    creation_date: Optional[date] = None
    creation_day: Optional[int] = None
    material: Optional[MaterialDTO] = None
    molecular_data: Optional[MolecularDataDTO] = None


class AnalysisDTO(_Snapshot):
    id: int
    reference_id: Optional[str] = None
    type_id: AnalysisType
    analysis_date: Optional[date] = None
    analysis_day: Optional[int] = None
    parameters: Optional[dict] = None


class AnalysedSampleDTO(_Snapshot):
    id: int
    target_sample_id: int
    matched_sample_id: Optional[int] = None
    analysis: AnalysisDTO
