import numpy as np

def logistic_activation(z):
    return float(1.0 / (1.0 + np.exp(-z)))

def thresholded_logistic_activation(z):
    # Non-positive signals do not fire at all; the sigmoid only sees z > 0
    if z <= 0:
        return 0.0
    return logistic_activation(z)
