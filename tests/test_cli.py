import json

from run_simulation import main


def test_cli_writes_files(tmp_path):
    params = tmp_path / 'params.json'
    params.write_text(json.dumps({'n_subjects': 2, 'n_trials': 2}))
    out = tmp_path / 'out'
    assert main(['-o', str(out), '-p', str(params), '--seed', '3', '--save-coefficients']) == 0
    assert sorted(p.name for p in out.iterdir()) == ['data_S1.csv', 'data_S2.csv', 'true_coefficients.csv']


def test_cli_reports_bad_config(tmp_path):
    params = tmp_path / 'params.json'
    params.write_text(json.dumps({'n_subjects': 0}))
    assert main(['-o', str(tmp_path / 'out'), '-p', str(params)]) == 1
