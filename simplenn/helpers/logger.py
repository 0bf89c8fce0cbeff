# helpers/logger.py
import csv, json, datetime, pathlib
import numpy as np
import matplotlib.pyplot as plt


class RunLogger:
    """
    Persists the history of a training run in its own timestamped directory:
    history.csv (one row per epoch), history.json, the last/best parameters
    checkpoints (npz) and the loss curve.
    """
    def __init__(self, root="runs", tag="run"):
        ts = datetime.datetime.now().strftime("%Y%m%d-%H%M%S")
        self.root = pathlib.Path(root)
        self.dir = self.root / f"{tag}_{ts}"
        self.dir.mkdir(parents=True, exist_ok=True)
        self.tag = tag
        self.csv_path = self.dir / "history.csv"
        self.json_path = self.dir / "history.json"
        self.best_ckpt = self.dir / "checkpoint_best.npz"
        self.last_ckpt = self.dir / "checkpoint_last.npz"
        self.metrics = []  # list of dicts per epoch
        self._csv_header_written = False

    # ---------- logging ----------
    def log_epoch(self, epoch, **kwargs):
        row = {"epoch": int(epoch), **{k: float(v) for k, v in kwargs.items()}}
        self.metrics.append(row)
        with open(self.csv_path, "a", newline="") as f:
            writer = csv.DictWriter(f, fieldnames=list(row.keys()))
            if not self._csv_header_written:
                writer.writeheader()
                self._csv_header_written = True
            writer.writerow(row)

    def save_json(self):
        with open(self.json_path, "w") as f:
            json.dump(self.metrics, f, indent=2)

    def save_checkpoint(self, npz_dict, best=False):
        path = self.best_ckpt if best else self.last_ckpt
        np.savez(path, **npz_dict)
        return str(path)

    # ---------- plotting ----------
    def plot_loss(self, history, subdir="plots"):
        """
        Saves the loss curve as loss_curve_<tag>.png.
        history: {'loss': [...]} and optionally {'val_loss': [...]}
        """
        train = history.get("loss", [])
        val = history.get("val_loss", [])

        outdir = self.dir / subdir
        outdir.mkdir(parents=True, exist_ok=True)
        path = outdir / f"loss_curve_{self.tag}.png"

        plt.figure()
        if len(train) > 0:
            plt.plot(train, label="train loss")
        if len(val) > 0:
            plt.plot(val, label="val loss")
        plt.xlabel("Epoch")
        plt.ylabel("Loss")
        plt.title(f"Loss vs Epochs ({self.tag})")
        if len(train) > 0 or len(val) > 0:
            plt.legend()
        plt.tight_layout()
        plt.savefig(path, dpi=160)
        plt.close()
        return str(path)
