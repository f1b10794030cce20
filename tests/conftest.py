import os

from hypothesis import HealthCheck, settings

# Measure CLI subprocesses too when coverage is driving the run
if os.getenv("COVERAGE_PROCESS_START"):
    import coverage

    coverage.process_startup()

settings.register_profile("dev", max_examples=50)
settings.register_profile(
    "ci",
    max_examples=300,
    deadline=None,
    suppress_health_check=[HealthCheck.too_slow],
)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))
