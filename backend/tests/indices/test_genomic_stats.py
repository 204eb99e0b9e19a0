from __future__ import annotations

from domain.schema import MaterialType
from domain.variants import CNV, SSM, SV
from indices.stats import GenomicStats, load_genomic_stats


def test_donor_without_imaging_specimens_has_zero_stats(session_factory, seed):
    donor_id = seed.donor()
    seed.specimen(donor_id, material_type=MaterialType.NORMAL)

    assert load_genomic_stats(session_factory, donor_id) == GenomicStats()


def test_counts_are_distinct_across_samples(session_factory, seed):
    donor_id = seed.donor()
    specimen_a = seed.specimen(donor_id, reference_id="A")
    specimen_b = seed.specimen(donor_id, reference_id="B")
    sample_a = seed.analysed_sample(specimen_a)
    sample_b = seed.analysed_sample(specimen_b)

    egfr = seed.gene("EGFR")
    pten = seed.gene("PTEN")
    ssm = seed.variant(SSM, gene_ids=(egfr,))
    cnv_1 = seed.variant(CNV, start=10, gene_ids=(egfr, pten))
    cnv_2 = seed.variant(CNV, start=20)
    sv = seed.variant(SV)

    seed.variant_entry(SSM, sample_a, ssm)
    seed.variant_entry(SSM, sample_b, ssm)
    seed.variant_entry(CNV, sample_a, cnv_1)
    seed.variant_entry(CNV, sample_b, cnv_2)
    seed.variant_entry(SV, sample_b, sv)

    stats = load_genomic_stats(session_factory, donor_id)

    assert stats == GenomicStats(number_of_genes=2, number_of_ssms=1, number_of_cnvs=2, number_of_svs=1)


def test_variants_of_non_imaging_specimens_are_ignored(session_factory, seed):
    donor_id = seed.donor()
    normal = seed.specimen(donor_id, reference_id="N", material_type=MaterialType.NORMAL)
    sample = seed.analysed_sample(normal)
    seed.variant_entry(SSM, sample, seed.variant(SSM, gene_ids=(seed.gene("IDH1"),)))

    assert load_genomic_stats(session_factory, donor_id).number_of_ssms == 0


def test_stats_are_scoped_to_donor(session_factory, seed):
    first = seed.donor("DO1")
    second = seed.donor("DO2")
    sample = seed.analysed_sample(seed.specimen(second))
    seed.variant_entry(SV, sample, seed.variant(SV))

    assert load_genomic_stats(session_factory, first).number_of_svs == 0
    assert load_genomic_stats(session_factory, second).number_of_svs == 1
