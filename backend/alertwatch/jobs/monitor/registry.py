from alertwatch.jobs.monitor.sources.mta.source import MtaAlertsSource

SOURCES = {
    "mta": MtaAlertsSource,
}
