"""
Archive pipeline components.

This package moves one payload per archive set from a source to a
destination:

Modules:
    base: Source/Destination capability interfaces and Null adapters
    factory: Adapter selection by declared Type
    event_log: Bounded event log with a single log/alert consumer
    alerts: Alert dispatcher interface and the SES e-mail implementation
    config_loader: Configuration file loading and validation
    runner: run_set and the ArchiveRunner orchestrator

Subpackages:
    sources: Source adapters (RestAPI)
    destinations: Destination adapters (S3)

Usage:
    from archiver.runner import ArchiveRunner

Example:
    runner = ArchiveRunner()
    result = await runner.run("./config.json")

    print(f"{result['sets_failed']} of {result['sets_total']} sets failed")

Error Handling:
    Startup failures (configuration, adapter construction) end the run with
    one alert. Per-set failures are collected and reported in one summary
    alert once every set has been attempted.
"""
