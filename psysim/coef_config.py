# Filename: psysim/coef_config.py
# Population distributions for the per-subject regression coefficients

# Order: intercept, log-contrast slope, then one offset per non-reference
# spatial frequency (ascending). The generator is consumed in this order.
COEF_MEANS = (7.0, 2.0, 2.0, 1.5, 0.0, -2.0)
COEF_SDS = (0.2, 0.2, 0.2, 0.2, 0.2, 0.2)
