import numpy as np
import pandas as pd
import matplotlib.pyplot as plt
import pytest

from rank_aggregation_fdr.data import generate_screen_data
from rank_aggregation_fdr.evaluation import (
    compute_confusion_matrix,
    compute_metrics,
    discoveries_from_results,
    lo_value_auc,
    summarize_metrics,
)
from rank_aggregation_fdr.experiments import (
    run_percentile_sensitivity,
    run_single_replication,
    run_synthetic_evaluation,
)
from rank_aggregation_fdr.exceptions import InvalidInputError
from rank_aggregation_fdr.methods.baseline import bh_adjust, naive_bh_results
from rank_aggregation_fdr.visualization import (
    plot_fdr_curve,
    plot_lo_value_distribution,
    plot_percentile_sensitivity,
)

SMALL_SCREEN = {'n_groups': 40, 'items_per_group': 3, 'n_lists': 2}


@pytest.fixture
def toy_results():
    results = pd.DataFrame({
        'group_id': ['g2', 'g0', 'g1', 'g3'],
        'n_items': [3, 3, 3, 3],
        'lo_value': [0.001, 0.01, 0.005, 0.9],
        'fdr': [0.02, 0.05, 0.4, 1.0],
    })
    true_labels = pd.Series([0, 1, 0, 1], index=['g0', 'g1', 'g2', 'g3'])
    return results, true_labels


def test_discoveries_are_aligned_with_labels(toy_results):
    results, true_labels = toy_results
    discoveries = discoveries_from_results(results, true_labels, fdr_level=0.1)
    assert discoveries.tolist() == [True, False, True, False]


def test_discoveries_missing_group(toy_results):
    results, true_labels = toy_results
    with pytest.raises(ValueError):
        discoveries_from_results(results.iloc[1:], true_labels)


def test_confusion_and_metrics():
    discoveries = np.array([True, True, False, False, True])
    true_labels = np.array([0, 1, 0, 1, 0])

    cm = compute_confusion_matrix(discoveries, true_labels)
    assert cm == {'TP': 2, 'FP': 1, 'TN': 1, 'FN': 1, 'n_discoveries': 3, 'n_true_hits': 3}

    metrics = compute_metrics(discoveries, true_labels)
    assert metrics['power'] == pytest.approx(2 / 3)
    assert metrics['FDR'] == pytest.approx(1 / 3)
    assert metrics['F1'] == pytest.approx(2 / 3)


def test_metrics_without_discoveries():
    metrics = compute_metrics(np.zeros(3, dtype=bool), np.array([0, 1, 1]))
    assert metrics['power'] == 0.0
    assert metrics['FDR'] == 0.0


def test_lo_value_auc(toy_results):
    results, true_labels = toy_results
    assert lo_value_auc(results, true_labels) == pytest.approx(0.75)
    assert np.isnan(lo_value_auc(results, pd.Series(1, index=true_labels.index)))


def test_summarize_metrics():
    summary = summarize_metrics([{'power': 0.5, 'AUC': np.nan}, {'power': 1.0, 'AUC': 0.8}])
    assert summary['power']['mean'] == pytest.approx(0.75)
    assert summary['AUC']['mean'] == pytest.approx(0.8)
    assert summarize_metrics([]) == {}


def test_bh_adjust():
    lo_values = np.array([0.001, 0.008, 0.039, 0.041, 0.6])
    rejected, q_values = bh_adjust(lo_values, fdr_level=0.05)
    assert rejected.tolist() == [True, True, False, False, False]
    assert q_values == pytest.approx([0.005, 0.02, 0.05125, 0.05125, 0.6])


def test_naive_bh_results_keep_group_order():
    results = pd.DataFrame({
        'group_id': ['g3', 'g0', 'g1'],
        'n_items': [2, 2, 2],
        'lo_value': [0.5, 0.001, 0.02],
        'fdr': [1.0, 0.01, 0.05],
    })
    bh_results = naive_bh_results(results)

    assert bh_results['group_id'].tolist() == ['g3', 'g0', 'g1']
    assert bh_results['bh_fdr'].tolist() == pytest.approx([0.5, 0.003, 0.03])
    assert 'bh_fdr' not in results.columns

    true_labels = pd.Series([0, 0, 1], index=['g0', 'g1', 'g3'])
    discoveries = discoveries_from_results(bh_results, true_labels, column='bh_fdr')
    assert discoveries.tolist() == [True, True, False]


def test_bh_adjust_rejects_missing_values():
    with pytest.raises(InvalidInputError):
        bh_adjust(np.array([0.1, np.nan]))


def test_generate_screen_data():
    records, true_labels = generate_screen_data(**SMALL_SCREEN, hit_fraction=0.25, random_state=3)
    assert list(records.columns) == ['item_id', 'group_id', 'list_id', 'value']
    assert len(records) == 40 * 3 * 2
    assert int((true_labels == 0).sum()) == 10
    assert set(records['group_id']) == set(true_labels.index)


def test_single_replication():
    results = run_single_replication(SMALL_SCREEN, rand_pass_num=5, random_state=1)
    assert set(results) == {'RRA', 'BH'}
    assert 0.0 <= results['RRA']['power'] <= 1.0
    assert 'AUC' in results['RRA']


def test_synthetic_evaluation_writes_csv(tmp_path):
    all_results = run_synthetic_evaluation(
        effect_strengths=['strong'],
        n_replications=2,
        screen_config=SMALL_SCREEN,
        rand_pass_num=5,
        output_dir=tmp_path
    )
    assert len(all_results['strong']['RRA']) == 2
    table = pd.read_csv(tmp_path / 'synthetic_evaluation.csv')
    assert set(table['method']) == {'RRA', 'BH'}
    assert len(table) == 4


def test_percentile_sensitivity_and_plots():
    sensitivity = run_percentile_sensitivity(
        max_percentile_values=[0.1, 0.5],
        n_replications=2,
        screen_config=SMALL_SCREEN,
        rand_pass_num=5
    )
    assert len(sensitivity['power_mean']) == 2

    fig = plot_percentile_sensitivity(sensitivity)
    assert fig is not None
    plt.close(fig)


def test_plots(tmp_path):
    rng = np.random.default_rng(0)
    lo_values = np.sort(rng.uniform(size=30))
    null_pool = np.sort(rng.uniform(size=300))
    results = pd.DataFrame({
        'group_id': [f"g{i}" for i in range(30)],
        'n_items': 3,
        'lo_value': lo_values,
        'fdr': np.linspace(0.01, 1.0, 30),
    })

    fig = plot_lo_value_distribution(lo_values, null_pool, save_path=tmp_path / 'lo.png')
    plt.close(fig)
    fig = plot_fdr_curve(results, save_path=tmp_path / 'fdr.png')
    plt.close(fig)

    assert (tmp_path / 'lo.png').exists()
    assert (tmp_path / 'fdr.png').exists()
