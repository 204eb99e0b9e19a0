from __future__ import annotations

from domain.schema import ImageType, MaterialType
from domain.variants import CNV, SSM, SV
from indices.availability import build_data_index, check_gene_exp, check_variants
from indices.models import DataIndex


def test_bare_donor_only_flags_donor_and_modality(session_factory, seed):
    donor_id = seed.donor()

    data = build_data_index(session_factory, donor_id, ImageType.CT)

    assert data == DataIndex(donors=True, cts=True)


def test_full_donor_flags_every_available_kind(session_factory, seed):
    donor_id = seed.donor(clinical={"diagnosis": "Glioma"}, treatments=[{"therapy": "TMZ"}])
    specimen_id = seed.specimen(donor_id, molecular={"idh_status": "Wildtype"})
    sample_id = seed.analysed_sample(specimen_id)
    gene_id = seed.gene("EGFR")
    seed.variant_entry(SSM, sample_id, seed.variant(SSM))
    seed.variant_entry(CNV, sample_id, seed.variant(CNV))
    seed.expression(sample_id, gene_id)

    data = build_data_index(session_factory, donor_id, ImageType.MRI)

    assert data.clinical and data.treatments
    assert data.mris and not data.cts
    assert data.materials and data.materials_molecular
    assert data.ssms and data.cnvs and not data.svs
    assert data.gene_exp
    assert data.gene_exp_sc is False


def test_non_tumor_material_does_not_count(session_factory, seed):
    donor_id = seed.donor()
    seed.specimen(donor_id, material_type=MaterialType.NORMAL, molecular={"mgmt_status": "Unmethylated"})

    data = build_data_index(session_factory, donor_id, ImageType.MRI)

    assert data.materials is False
    assert data.materials_molecular is False


def test_check_helpers_handle_empty_specimen_lists(session_factory):
    assert check_variants(session_factory, SV, []) is False
    assert check_gene_exp(session_factory, []) is False


def test_check_variants_matches_only_requested_kind(session_factory, seed):
    specimen_id = seed.specimen(seed.donor())
    seed.variant_entry(SV, seed.analysed_sample(specimen_id), seed.variant(SV))

    assert check_variants(session_factory, SV, [specimen_id]) is True
    assert check_variants(session_factory, SSM, [specimen_id]) is False


def test_clinical_without_treatments(session_factory, seed):
    donor_id = seed.donor(clinical={"diagnosis": "Astrocytoma"})

    data = build_data_index(session_factory, donor_id, ImageType.MRI)

    assert data.clinical is True
    assert data.treatments is False
