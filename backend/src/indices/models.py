"""Pydantic models for image search index documents."""

from __future__ import annotations

import datetime as dt
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class IndexModel(BaseModel):
    """Base for index documents; serialized with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_document(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class ClinicalDataIndex(IndexModel):
    sex: Optional[str] = None
    enrollment_age: Optional[int] = None
    diagnosis: Optional[str] = None
    diagnosis_date: Optional[dt.date] = None
    primary_site: Optional[str] = None
    localization: Optional[str] = None
    vital_status: Optional[bool] = None
    vital_status_change_date: Optional[dt.date] = None
    vital_status_change_day: Optional[int] = None
    progression_status: Optional[bool] = None
    progression_status_change_date: Optional[dt.date] = None
    progression_status_change_day: Optional[int] = None
    kps_baseline: Optional[int] = None
    steroids_reactive: Optional[bool] = None


class TreatmentIndex(IndexModel):
    therapy: str
    details: Optional[str] = None
    start_date: Optional[dt.date] = None
    start_day: Optional[int] = None
    end_date: Optional[dt.date] = None
    end_day: Optional[int] = None
    duration_days: Optional[int] = None
    results: Optional[str] = None


class StudyIndex(IndexModel):
    id: int
    name: str


class ProjectIndex(IndexModel):
    id: int
    name: str


class DonorIndex(IndexModel):
    id: int
    reference_id: str
    mta_protected: Optional[bool] = None
    clinical_data: Optional[ClinicalDataIndex] = None
    treatments: Optional[list[TreatmentIndex]] = None
    studies: Optional[list[StudyIndex]] = None
    projects: Optional[list[ProjectIndex]] = None


class MaterialIndex(IndexModel):
    type: Optional[str] = None
    fixation_type: Optional[str] = None
    tumor_type: Optional[str] = None
    tumor_grade: Optional[int] = None
    source: Optional[str] = None


class MolecularDataIndex(IndexModel):
    mgmt_status: Optional[str] = None
    idh_status: Optional[str] = None
    idh_mutation: Optional[str] = None
    gene_knockouts: Optional[list[str]] = None


class AnalysisIndex(IndexModel):
    id: int
    reference_id: Optional[str] = None
    type: str
    date: Optional[dt.date] = None
    day: Optional[int] = None
    parameters: Optional[dict[str, Any]] = None


class SpecimenIndex(IndexModel):
    id: int
    parent_id: Optional[int] = None
    reference_id: str
    type: str
    creation_date: Optional[dt.date] = None
    creation_day: Optional[int] = None
    material: Optional[MaterialIndex] = None
    molecular_data: Optional[MolecularDataIndex] = None
    analyses: Optional[list[AnalysisIndex]] = None


class DataIndex(IndexModel):
    """Which kinds of related data exist for the indexed image's donor."""

    donors: bool = False
    clinical: bool = False
    treatments: bool = False
    mris: bool = False
    cts: bool = False
    materials: bool = False
    materials_molecular: bool = False
    ssms: bool = False
    cnvs: bool = False
    svs: bool = False
    gene_exp: bool = False
    gene_exp_sc: bool = False


class MriImageIndex(IndexModel):
    whole_tumor: Optional[float] = None
    contrast_enhancing: Optional[float] = None
    non_contrast_enhancing: Optional[float] = None
    median_adc_tumor: Optional[float] = None
    median_adc_ce: Optional[float] = None
    median_adc_edema: Optional[float] = None
    median_cbf_tumor: Optional[float] = None
    median_cbv_tumor: Optional[float] = None
    median_mtt_tumor: Optional[float] = None


class CtImageIndex(IndexModel):
    whole_tumor: Optional[float] = None
    contrast_enhancing: Optional[float] = None
    non_contrast_enhancing: Optional[float] = None


class ImageIndex(IndexModel):
    id: int
    reference_id: str
    type: str
    scanning_date: Optional[dt.date] = None
    scanning_day: Optional[int] = None
    mri: Optional[MriImageIndex] = None
    ct: Optional[CtImageIndex] = None

    donor_id: int
    donor: Optional[DonorIndex] = None
    specimens: Optional[list[SpecimenIndex]] = None
    data: Optional[DataIndex] = None

    number_of_genes: int = 0
    number_of_ssms: int = 0
    number_of_cnvs: int = 0
    number_of_svs: int = 0

    @property
    def key(self) -> str:
        return str(self.id)
