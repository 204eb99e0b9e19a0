"""Mapping of domain snapshots onto index document models."""

from __future__ import annotations

from datetime import date
from typing import Optional

from domain.models import (
    AnalysedSampleDTO,
    ClinicalDataDTO,
    DonorDTO,
    ImageDTO,
    SpecimenDTO,
    TreatmentDTO,
)

from .models import (
    AnalysisIndex,
    ClinicalDataIndex,
    CtImageIndex,
    DonorIndex,
    ImageIndex,
    MaterialIndex,
    MolecularDataIndex,
    MriImageIndex,
    ProjectIndex,
    SpecimenIndex,
    StudyIndex,
    TreatmentIndex,
)


def relative_day(value: Optional[date], anchor: Optional[date]) -> Optional[int]:
    """Days from ``anchor`` (usually the diagnosis date) to ``value``."""
    if value is None or anchor is None:
        return None
    return (value - anchor).days


def _day(stored_day: Optional[int], value: Optional[date], anchor: Optional[date]) -> Optional[int]:
    if stored_day is not None:
        return stored_day
    return relative_day(value, anchor)


def _none_if_empty(items: list) -> Optional[list]:
    return items or None


def map_image(image: ImageDTO, diagnosis_date: Optional[date]) -> ImageIndex:
    index = ImageIndex(
        id=image.id,
        reference_id=image.reference_id,
        type=image.type_id.value,
        scanning_date=image.scanning_date,
        scanning_day=_day(image.scanning_day, image.scanning_date, diagnosis_date),
        donor_id=image.donor_id,
    )
    if image.mri_image is not None:
        index.mri = MriImageIndex.model_validate(image.mri_image.model_dump())
    if image.ct_image is not None:
        index.ct = CtImageIndex.model_validate(image.ct_image.model_dump())
    return index


def map_clinical_data(clinical: ClinicalDataDTO) -> ClinicalDataIndex:
    diagnosis_date = clinical.diagnosis_date
    return ClinicalDataIndex(
        sex=clinical.sex.value if clinical.sex else None,
        enrollment_age=clinical.enrollment_age,
        diagnosis=clinical.diagnosis,
        diagnosis_date=diagnosis_date,
        primary_site=clinical.primary_site,
        localization=clinical.localization,
        vital_status=clinical.vital_status,
        vital_status_change_date=clinical.vital_status_change_date,
        vital_status_change_day=_day(
            clinical.vital_status_change_day, clinical.vital_status_change_date, diagnosis_date
        ),
        progression_status=clinical.progression_status,
        progression_status_change_date=clinical.progression_status_change_date,
        progression_status_change_day=_day(
            clinical.progression_status_change_day, clinical.progression_status_change_date, diagnosis_date
        ),
        kps_baseline=clinical.kps_baseline,
        steroids_reactive=clinical.steroids_reactive,
    )


def map_treatment(treatment: TreatmentDTO, diagnosis_date: Optional[date]) -> TreatmentIndex:
    start_day = _day(treatment.start_day, treatment.start_date, diagnosis_date)
    if treatment.end_date is not None:
        end_day = relative_day(treatment.end_date, diagnosis_date)
    elif start_day is not None and treatment.duration_days is not None:
        end_day = start_day + treatment.duration_days
    else:
        end_day = None

    return TreatmentIndex(
        therapy=treatment.therapy,
        details=treatment.details,
        start_date=treatment.start_date,
        start_day=start_day,
        end_date=treatment.end_date,
        end_day=end_day,
        duration_days=treatment.duration_days,
        results=treatment.results,
    )


def map_donor(donor: DonorDTO) -> DonorIndex:
    clinical = donor.clinical_data
    diagnosis_date = clinical.diagnosis_date if clinical else None
    return DonorIndex(
        id=donor.id,
        reference_id=donor.reference_id,
        mta_protected=donor.mta_protected,
        clinical_data=map_clinical_data(clinical) if clinical else None,
        treatments=_none_if_empty([map_treatment(item, diagnosis_date) for item in donor.treatments]),
        studies=_none_if_empty([StudyIndex(id=study.id, name=study.name) for study in donor.studies]),
        projects=_none_if_empty([ProjectIndex(id=project.id, name=project.name) for project in donor.projects]),
    )


def map_specimen(specimen: SpecimenDTO, diagnosis_date: Optional[date]) -> SpecimenIndex:
    index = SpecimenIndex(
        id=specimen.id,
        parent_id=specimen.parent_id,
        reference_id=specimen.reference_id,
        type=specimen.type_id.value,
        creation_date=specimen.creation_date,
        creation_day=_day(specimen.creation_day, specimen.creation_date, diagnosis_date),
    )
    material = specimen.material
    if material is not None:
        index.material = MaterialIndex(
            type=material.type_id.value if material.type_id else None,
            fixation_type=material.fixation_type,
            tumor_type=material.tumor_type,
            tumor_grade=material.tumor_grade,
            source=material.source,
        )
    if specimen.molecular_data is not None:
        index.molecular_data = MolecularDataIndex.model_validate(specimen.molecular_data.model_dump())
    return index


def map_analysis(sample: AnalysedSampleDTO, diagnosis_date: Optional[date]) -> AnalysisIndex:
    analysis = sample.analysis
    return AnalysisIndex(
        id=sample.id,
        reference_id=analysis.reference_id,
        type=analysis.type_id.value,
        date=analysis.analysis_date,
        day=_day(analysis.analysis_day, analysis.analysis_date, diagnosis_date),
        parameters=analysis.parameters,
    )
