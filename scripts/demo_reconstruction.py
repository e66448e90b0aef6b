"""
Progressive reconstruction demo.

Builds a synthetic test pattern, runs the Fourier visualizer through a set of
frequency counts and an animated sweep, and saves:
- magnitude / phase spectra
- a reconstruction progress strip
- the visualization-line overlay for the last count
- a CSV with the mean squared error per k

Usage (from project root):
python -m scripts.demo_reconstruction
"""

import csv
import logging
import os
from datetime import datetime

import numpy as np

from fourier_core.complex_image import SpatialImage
from fourier_core.config import AnimationConfig, SweepMode
from fourier_core.events import FrequencyChangeEvent
from fourier_core.fft_engine import compute_ifft, forward_transform
from fourier_core.visualizer import FourierVisualizer
from visuals.display import spectrum_display
from visuals.plots import (
    plot_magnitude_spectrum,
    plot_phase_spectrum,
    plot_reconstruction_progress,
    plot_visualization_lines,
)

# pipeline params (edit as needed)
SIZE = 64
COUNTS = [1, 4, 16, 64, 256, 1024]
CANVAS = (512, 512)
FRAME_DT = 1.0 / 60.0
SWEEP_FRAMES = 240

timestamp = datetime.now().strftime("%Y%m%dT%H%M%S")
OUTDIR = os.path.join("results", f"reconstruction_demo_{timestamp}")


def make_pattern(size: int) -> np.ndarray:
    """Disc + diagonal stripes, values in 0..1."""
    y, x = np.mgrid[0:size, 0:size]
    disc = ((x - size / 2) ** 2 + (y - size / 2) ** 2) < (size / 4) ** 2
    stripes = 0.5 + 0.5 * np.sin(2 * np.pi * (x + y) / 8.0)
    return np.where(disc, 1.0, 0.3 * stripes)


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    os.makedirs(OUTDIR, exist_ok=True)

    pattern = make_pattern(SIZE)
    freq = forward_transform(SpatialImage.from_array(pattern))
    print("Roundtrip max error:", float(np.max(np.abs(compute_ifft(freq) - pattern))))

    plot_magnitude_spectrum(freq, out_path=os.path.join(OUTDIR, "magnitude_spectrum.png"))
    plot_phase_spectrum(freq, out_path=os.path.join(OUTDIR, "phase_spectrum.png"))

    vis = FourierVisualizer(AnimationConfig(sweep_mode=SweepMode.PING_PONG, frequencies_per_second=400.0))
    vis.events.subscribe(
        FrequencyChangeEvent,
        lambda e: logging.getLogger("demo").debug("k -> %d / %d", e.new_frequency_count, e.max_frequencies),
    )
    vis.set_image(freq)

    csv_path = os.path.join(OUTDIR, "mse.csv")
    reconstructions = {}
    with open(csv_path, "w", newline="", encoding="utf-8") as csvf:
        writer = csv.DictWriter(csvf, fieldnames=["k", "mse"])
        writer.writeheader()
        for k in COUNTS:
            vis.set_frequency_count(k)
            recon = vis.reconstructed_image()
            mse = float(np.mean((recon.data.real - pattern) ** 2))
            writer.writerow({"k": k, "mse": mse})
            reconstructions[k] = recon
            print(f"k={k:5d}  mse={mse:.6f}")

    plot_reconstruction_progress(pattern, reconstructions, out_path=os.path.join(OUTDIR, "progress.png"))
    background = spectrum_display(vis.magnitude_spectrum(), SIZE, SIZE)
    plot_visualization_lines(
        vis.visualization_lines(*CANVAS), *CANVAS,
        background=background,
        out_path=os.path.join(OUTDIR, "lines.png"),
    )

    # animated sweep
    vis.reset_animation()
    vis.start_animation()
    counts = []
    for _ in range(SWEEP_FRAMES):
        vis.update_animation(FRAME_DT)
        counts.append(vis.frequency_count)
    print("Sweep peak k:", max(counts), "final k:", counts[-1])

    print("Demo done. Results in:", OUTDIR)


if __name__ == "__main__":
    main()
