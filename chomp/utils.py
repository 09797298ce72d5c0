from copy import deepcopy
import logging

import pandas as pd


###########
# Logging #
###########
class MetricLogger:
    """Collects one dict of metrics per step, e.g. one row per solved board"""

    def __init__(self, clear_on_step=True):
        self.curr_kv = {}
        self.all_kv = []
        self.clear_on_step = clear_on_step

    def add_metric(self, key, value):
        self.curr_kv[key] = value

    def step(self):
        self.all_kv.append(deepcopy(self.curr_kv))
        if self.clear_on_step:
            self.curr_kv = {}

    def to_df(self):
        return pd.DataFrame(self.all_kv)

    def dump(self, path):
        self.to_df().to_csv(path, index=False)

    @staticmethod
    def load(path):
        logger = MetricLogger()
        logger.all_kv = pd.read_csv(path).to_dict(orient="records")
        return logger


def set_log_level(log_level=logging.INFO):
    logger = logging.getLogger()
    logger.setLevel(log_level)


def setup_logging(output_path=None, level=logging.INFO, stderr=False):
    # clear existing handlers
    for handler in logging.root.handlers[:]:
        logging.root.removeHandler(handler)

    handlers = []
    if output_path:
        handlers.append(logging.FileHandler(output_path, encoding="utf-8"))
    if stderr or not handlers:
        handlers.append(logging.StreamHandler())
    logging.basicConfig(
        format="%(asctime)s [%(levelname)s]: %(message)s",
        level=level,
        handlers=handlers,
    )
