"""
Gaussian Naive Bayes - Global Configuration

This module contains the configuration constants shared by the estimator,
the classifier and the snapshot codec.
"""

import logging

import numpy as np

# =============================================================================
# NUMERIC SETTINGS
# =============================================================================
FLOAT_DTYPE = np.float64
SQRT_2PI = float(np.sqrt(2 * np.pi))

# Added to every variance entry at fit time (0.0 keeps population variance exact)
DEFAULT_VAR_SMOOTHING = 0.0

# Variances at or below this value are reported as a data-quality warning
NEAR_ZERO_VARIANCE = 1e-9

# =============================================================================
# SNAPSHOT SETTINGS
# =============================================================================
SNAPSHOT_VERSION = 1
SUPPORTED_SNAPSHOT_VERSIONS = (1,)

# =============================================================================
# LOGGING
# =============================================================================
LOG_FORMAT = "[%(asctime)s] [%(levelname)s] (%(name)s): %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
DEFAULT_LOG_LEVEL = logging.INFO
