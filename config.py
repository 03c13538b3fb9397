# Loan and horizon
LOAN_AMOUNT = 1_000_000.0     # CHF
PROJECTION_YEARS = 10

# Market inputs (plain fractions, 0.0125 = 1.25%)
SARON_RATE = 0.0125           # current SARON
SARON_MARGIN = 0.008          # bank margin on top of SARON
FIXED_RATE_2Y = 0.0170
FIXED_RATE_5Y = 0.0180
FIXED_RATE_10Y = 0.0200

# Mean-reverting SARON model
MEAN_REVERSION = 0.05         # monthly pull toward the long-term mean
VOLATILITY = 0.01             # annualized
LONG_TERM_MEAN = 0.015

# Simulation settings
N_SIMULATIONS = 1000
MAX_SIMULATIONS = 100_000
RANDOM_SEED = 42
N_WORKERS = 1                 # >1 generates paths in worker processes
SAMPLE_PATHS = 10             # raw paths kept for display

# Rate floors
RATE_FLOOR = -0.01            # SARON may go slightly negative
VARIABLE_RATE_FLOOR = 0.001
RENEWAL_RATE_FLOOR = 0.005

# Fixed-rate products (months) and renewal spreads keyed by nominal duration.
# None marks the catch-all bucket.
FIXED_DURATIONS_MONTHS = (24, 60, 120)
RENEWAL_SPREADS = (
    (24, 0.006),
    (60, 0.008),
    (None, 0.012),
)

# Reporting
HISTOGRAM_BINS = 20
RISK_HIGH = 0.5               # (p90 - p10) / median
RISK_MODERATE = 0.3
