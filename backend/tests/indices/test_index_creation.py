from __future__ import annotations

from datetime import date

from domain.schema import AnalysisType, ImageType, MaterialType
from domain.variants import SSM
from indices.service import ImageIndexCreationService


def test_missing_image_yields_none(session_factory):
    service = ImageIndexCreationService(session_factory)

    assert service.create_index("999") is None


def test_document_for_mri_image(session_factory, seed):
    donor_id = seed.donor(
        clinical={"diagnosis": "Glioblastoma", "diagnosis_date": date(2021, 3, 1)},
        treatments=[{"therapy": "Radiotherapy", "start_date": date(2021, 3, 11), "duration_days": 30}],
        studies=["GLIO-IMG"],
    )
    image_id = seed.image(donor_id, scanning_date=date(2021, 2, 27), features={"whole_tumor": 41.2})
    specimen_id = seed.specimen(donor_id, reference_id="T1", creation_date=date(2021, 3, 5))
    sample_id = seed.analysed_sample(specimen_id, type_id=AnalysisType.WES, analysis_date=date(2021, 4, 1))
    seed.variant_entry(SSM, sample_id, seed.variant(SSM, gene_ids=(seed.gene("IDH1"),)))

    index = ImageIndexCreationService(session_factory).create_index(str(image_id))

    assert index.key == str(image_id)
    assert index.type == "MRI"
    assert index.scanning_day == -2
    assert index.mri.whole_tumor == 41.2
    assert index.ct is None

    assert index.donor_id == donor_id
    assert index.donor.clinical_data.diagnosis == "Glioblastoma"
    treatment = index.donor.treatments[0]
    assert (treatment.start_day, treatment.end_day) == (10, 40)
    assert [study.name for study in index.donor.studies] == ["GLIO-IMG"]
    assert index.donor.projects is None

    [specimen] = index.specimens
    assert specimen.creation_day == 4
    assert specimen.material.type == "Tumor"
    [analysis] = specimen.analyses
    assert (analysis.type, analysis.day) == ("WES", 31)

    assert index.data.mris and not index.data.cts
    assert index.data.ssms
    assert (index.number_of_ssms, index.number_of_genes) == (1, 1)
    assert (index.number_of_cnvs, index.number_of_svs) == (0, 0)


def test_document_for_ct_image_without_related_data(session_factory, seed):
    donor_id = seed.donor()
    image_id = seed.image(donor_id, type_id=ImageType.CT, scanning_day=12)
    seed.specimen(donor_id, material_type=MaterialType.NORMAL)

    index = ImageIndexCreationService(session_factory).create_index(image_id)

    assert index.type == "CT"
    assert index.mri is None and index.ct is not None
    assert index.scanning_day == 12
    assert index.donor.clinical_data is None
    assert index.donor.treatments is None
    assert index.specimens is None
    assert index.data.cts and not index.data.mris
    assert index.number_of_genes == 0


def test_specimen_without_analyses_has_null_analyses(session_factory, seed):
    donor_id = seed.donor()
    image_id = seed.image(donor_id)
    seed.specimen(donor_id)

    index = ImageIndexCreationService(session_factory).create_index(image_id)

    assert len(index.specimens) == 1
    assert index.specimens[0].analyses is None


def test_document_serializes_with_camel_case_keys(session_factory, seed):
    donor_id = seed.donor()
    image_id = seed.image(donor_id, reference_id="IMG-42")

    document = ImageIndexCreationService(session_factory).create_index(image_id).to_document()

    assert document["referenceId"] == "IMG-42"
    assert document["donorId"] == donor_id
    assert document["numberOfSsms"] == 0
    assert document["data"]["geneExpSc"] is False


def test_image_of_purged_donor_still_builds(session_factory, seed):
    image_id = seed.image(999, reference_id="ORPHAN", scanning_date=date(2022, 6, 1))

    index = ImageIndexCreationService(session_factory).create_index(image_id)

    assert index is not None
    assert index.reference_id == "ORPHAN"
    assert index.donor_id == 999
    assert index.donor is None
    assert index.scanning_day is None
    assert index.specimens is None
    assert index.data.clinical is False


def test_modality_flags_follow_the_indexed_image(session_factory, seed):
    donor_id = seed.donor()
    mri_id = seed.image(donor_id, type_id=ImageType.MRI, reference_id="MRI-1")
    ct_id = seed.image(donor_id, type_id=ImageType.CT, reference_id="CT-1")
    service = ImageIndexCreationService(session_factory)

    mri = service.create_index(mri_id).data
    ct = service.create_index(ct_id).data

    assert (mri.mris, mri.cts) == (True, False)
    assert (ct.mris, ct.cts) == (False, True)
