import numpy as np
import pytest

from psysim.design import Factor, FactorLevels, build_design_table, design_matrix
from psysim.errors import ConfigurationError, DomainError


def test_default_design_has_7000_rows(default_levels):
    table = build_design_table(default_levels)
    assert len(table) == 5 * 7 * 5 * 2 * 20
    assert len(table) == default_levels.n_cells


def test_row_count_is_product_of_level_sizes():
    levels = FactorLevels(['a', 'b', 'c'], [0.1, 0.2], [1.0, 2.0, 4.0, 8.0], ['left', 'right'], range(1, 4))
    table = build_design_table(levels)
    assert len(table) == 3 * 2 * 4 * 2 * 3
    assert table.drop(columns='sf_bucket').duplicated().sum() == 0


def test_subject_varies_fastest(default_levels):
    table = build_design_table(default_levels)
    first = table.iloc[:5]
    assert list(first['subject']) == ['S1', 'S2', 'S3', 'S4', 'S5']
    assert first['contrast'].nunique() == 1
    assert table.iloc[5]['contrast'] > table.iloc[0]['contrast']
    assert (table.iloc[:len(table) // 20]['trial'] == 1).all()


def test_sf_bucket_is_rounded(default_levels):
    table = build_design_table(default_levels)
    assert np.allclose(table['sf_bucket'], table['sf'].round(2))
    assert list(table.columns) == ['subject', 'contrast', 'sf', 'sf_bucket', 'target_side', 'trial']


def test_factor_reference_is_smallest_level():
    factor = Factor('sf_bucket', [4.47, 0.5, 40.0, 1.5, 0.5])
    assert factor.levels == (0.5, 1.5, 4.47, 40.0)
    assert factor.reference == 0.5
    assert factor.column_names() == ['sf_bucket[1.5]', 'sf_bucket[4.47]', 'sf_bucket[40.0]']


def test_factor_rejects_unknown_level():
    factor = Factor('sf_bucket', [0.5, 1.5])
    with pytest.raises(ConfigurationError):
        factor.dummies(np.array([0.5, 3.0]))


def test_empty_level_set_rejected():
    with pytest.raises(ConfigurationError):
        FactorLevels(['S1'], [], [1.0], ['left', 'right'], [1])
    with pytest.raises(ConfigurationError):
        Factor('sf_bucket', [])


def test_design_matrix_columns(default_levels):
    table = build_design_table(default_levels)
    X = design_matrix(table, default_levels.sf_factor())
    assert X.shape == (len(table), 6)
    assert list(X.columns[:2]) == ['Intercept', 'log_contrast']
    assert (X['Intercept'] == 1).all()
    assert np.allclose(X['log_contrast'], np.log(table['contrast']))
    assert X.index.equals(table.index)


def test_reference_level_encodes_as_zeros(default_levels):
    table = build_design_table(default_levels)
    sf_factor = default_levels.sf_factor()
    X = design_matrix(table, sf_factor)
    dummies = X[sf_factor.column_names()]
    is_ref = table['sf_bucket'] == sf_factor.reference
    assert (dummies[is_ref] == 0).all().all()
    assert (dummies[~is_ref].sum(axis=1) == 1).all()


def test_subset_keeps_global_columns(default_levels):
    table = build_design_table(default_levels)
    sf_factor = default_levels.sf_factor()
    full = design_matrix(table, sf_factor)

    # A subject's rows, and a subset missing the reference level entirely
    one_subject = table[table['subject'] == 'S3']
    no_reference = table[table['sf_bucket'] > sf_factor.reference]
    for subset in (one_subject, no_reference):
        X = design_matrix(subset, sf_factor)
        assert list(X.columns) == list(full.columns)
        assert np.array_equal(X.to_numpy(), full.loc[subset.index].to_numpy())


def test_non_positive_contrast_raises_domain_error():
    levels = FactorLevels(['S1'], [0.0, 0.1], [1.0], ['left', 'right'], [1])
    table = build_design_table(levels)
    with pytest.raises(DomainError):
        design_matrix(table, levels.sf_factor())
