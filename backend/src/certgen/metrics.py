"""OpenTelemetry metrics for the certificate generator accessor."""

from opentelemetry import metrics

# Get meter for certgen module
meter = metrics.get_meter("certgen")

# Command dispatch counters
commands_sent_total = meter.create_counter(
    name="certgen_commands_sent_total",
    description="Total commands sent to the certificate generator",
    unit="1",
)

remote_errors_total = meter.create_counter(
    name="certgen_remote_errors_total",
    description="Total commands rejected by the certificate generator",
    unit="1",
)

transport_errors_total = meter.create_counter(
    name="certgen_transport_errors_total",
    description="Total commands that failed at the transport",
    unit="1",
)

# Round trip histogram
command_duration = meter.create_histogram(
    name="certgen_command_duration_seconds",
    description="Command round trip duration in seconds",
    unit="s",
)


class CertGenMetrics:
    """Facade for certgen metrics with proper labels."""

    def record_command_succeeded(self, command: str, duration_seconds: float) -> None:
        """Record a successful round trip. Labels: command, result=success"""
        commands_sent_total.add(1, {"command": command, "result": "success"})
        command_duration.record(duration_seconds, {"command": command})

    def record_remote_error(self, command: str, duration_seconds: float) -> None:
        """Record a command rejected by the remote. Labels: command, result=remote_error"""
        commands_sent_total.add(1, {"command": command, "result": "remote_error"})
        remote_errors_total.add(1, {"command": command})
        command_duration.record(duration_seconds, {"command": command})

    def record_transport_error(self, command: str) -> None:
        """Record a transport failure. Labels: command, result=transport_error"""
        commands_sent_total.add(1, {"command": command, "result": "transport_error"})
        transport_errors_total.add(1, {"command": command})


# Singleton instance
certgen_metrics = CertGenMetrics()
