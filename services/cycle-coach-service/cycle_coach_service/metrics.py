from prometheus_client import Counter

CYCLE_PLANS_GENERATED_TOTAL = Counter(
    "cycle_plans_generated_total",
    "Number of plans and insights produced by the generation pipeline",
    ["kind"],
)

GENERATION_FALLBACKS_TOTAL = Counter(
    "generation_fallbacks_total",
    "Number of generated replies replaced by the phase fallback",
    ["kind"],
)

GENERATION_FAILURES_TOTAL = Counter(
    "generation_failures_total",
    "Number of generation requests that failed before a reply was received",
    ["kind"],
)
