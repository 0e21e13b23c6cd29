import numpy as np
import matplotlib.pyplot as plt
import pytest

from plottopo.cli import main
from plottopo.pipeline import run_pipeline
from plottopo.report import save_figure, export_pdf


@pytest.fixture
def erp_file(tmp_path, erp):
    path = tmp_path / "erp.npy"
    np.save(path, erp)
    return path


# ═══════════════════════════════════════════════════════════════════════════════
# PIPELINE
# ═══════════════════════════════════════════════════════════════════════════════

def test_pipeline_exports_png(tmp_path, erp_file, loc_file):
    out = tmp_path / "figs" / "erp.png"
    result = run_pipeline({
        "data": {"path": str(erp_file), "chanlocs": str(loc_file)},
        "plot": {"title": "ERP", "vert": [10]},
        "output": {"path": str(out)},
    }, verbose=False)

    assert out.exists()
    assert result["output_path"] == out
    assert len(result["axes"]) == 7
    assert result["chanlocs"]["labels"][0] == "Fp1"


def test_pipeline_npz_key_and_plot_chanlocs(tmp_path, erp, loc_records, capsys):
    path = tmp_path / "erp.npz"
    np.savez(path, erp=erp[:5], noise=np.zeros((2, 3)))
    result = run_pipeline({
        "data": {"path": str(path), "key": "erp"},
        "plot": {"chanlocs": loc_records},
        "output": {},
    })
    out = capsys.readouterr().out
    assert "[STEP 1/4] LOADING DATA" in out
    assert "Read 5 channels (5 with scalp coordinates)" in out
    assert "No output path" in out
    assert result["output_path"] is None
    assert result["data"].shape == (5, 40)


def test_save_figure_pdf_and_bad_suffix(tmp_path):
    fig, _ = plt.subplots()
    path = save_figure(fig, tmp_path / "erp.pdf", close=True)
    assert path.exists()
    fig, _ = plt.subplots()
    with pytest.raises(ValueError, match="Unsupported output type"):
        save_figure(fig, tmp_path / "erp.xyz")


def test_export_pdf_multiple_pages(tmp_path):
    figs = [plt.subplots()[0] for _ in range(2)]
    path = export_pdf(figs, tmp_path / "all.pdf")
    assert path.exists()
    assert plt.get_fignums() == []


# ═══════════════════════════════════════════════════════════════════════════════
# COMMAND LINE
# ═══════════════════════════════════════════════════════════════════════════════

def test_main_plots_and_saves(tmp_path, erp_file, loc_file, capsys):
    out = tmp_path / "erp.png"
    code = main([str(erp_file), "--chanlocs", str(loc_file), "--vert", "0", "-o", str(out)])
    assert code == 0
    assert out.exists()
    assert "✓ PLOTTED 7 CHANNELS" in capsys.readouterr().out


def test_main_with_config_file(tmp_path, erp_file):
    out = tmp_path / "erp.svg"
    job = tmp_path / "job.json"
    job.write_text(
        '{"data": {"path": "%s"}, "plot": {"geom": [2, 4]}, "output": {"path": "%s"}}'
        % (erp_file.as_posix(), out.as_posix())
    )
    assert main(["--config", str(job)]) == 0
    assert out.exists()


def test_main_reports_errors(tmp_path, capsys):
    assert main([str(tmp_path / "missing.npy")]) == 1
    assert "✗ ERROR: Data file not found" in capsys.readouterr().out


def test_main_rejects_bad_option_values(erp_file, capsys):
    assert main([str(erp_file), "--frames", "1"]) == 1
    assert "2 frames" in capsys.readouterr().out


def test_pipeline_null_frames_keeps_epochs(tmp_path):
    path = tmp_path / "epochs.npy"
    np.save(path, np.random.default_rng(6).standard_normal((4, 10, 3)))
    result = run_pipeline({
        "data": {"path": str(path)},
        "plot": {"frames": None},
        "output": {},
    }, verbose=False)
    assert len(result["axes"][0].lines) == 3
