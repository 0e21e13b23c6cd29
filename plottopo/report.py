"""
Report Export

Save plottopo figures as images or as a multi-page PDF.
"""

from pathlib import Path
import matplotlib.pyplot as plt
from matplotlib.backends.backend_pdf import PdfPages

IMAGE_SUFFIXES = {".png", ".svg", ".jpg", ".jpeg", ".tif", ".tiff", ".eps"}


def save_figure(fig: plt.Figure, output_path: Path, *, dpi: int = 150, close: bool = False) -> Path:
    """
    Save one figure; the format follows the file suffix (.pdf or an image type).

    Returns
    -------
    Path
        Path to the saved file
    """
    output_path = Path(output_path)
    suffix = output_path.suffix.lower()
    if suffix == ".pdf":
        return export_pdf([fig], output_path, dpi=dpi, display_plots=not close)
    if suffix not in IMAGE_SUFFIXES:
        raise ValueError(
            f"Unsupported output type '{output_path.suffix}'. "
            f"Use .pdf or one of: {', '.join(sorted(IMAGE_SUFFIXES))}"
        )
    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(output_path, dpi=dpi)
    if close:
        plt.close(fig)
    return output_path


def _figure_title(fig: plt.Figure) -> str:
    """Title of the host axes (first axes of a plottopo figure)."""
    return fig.axes[0].get_title() if fig.axes else ""


def export_pdf(figures: list, output_path: Path, *, dpi: int = 150, display_plots: bool = False) -> Path:
    """
    Write plottopo figures to a PDF, one page per figure.

    Parameters
    ----------
    figures : list
        plt.Figure objects, in page order
    output_path : Path
        Output PDF file path
    dpi : int
        Resolution of rasterized content
    display_plots : bool
        Keep the figures open after writing (default: close them)

    Returns
    -------
    Path
        Path to the written PDF
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    titles = [t for t in (_figure_title(fig) for fig in figures) if t]
    metadata = {"Title": "; ".join(titles)} if titles else None

    with PdfPages(output_path, metadata=metadata) as pdf:
        for fig in figures:
            pdf.savefig(fig, dpi=dpi)
    if not display_plots:
        for fig in figures:
            plt.close(fig)

    return output_path
