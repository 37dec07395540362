"""
ICMP echo probe for a single host.

Every network fault (no reply, name lookup failure, socket errors) is folded
into a failed ProbeResult so the monitor loop never has to handle exceptions.
"""

from icmplib import ICMPLibError, ping
from loguru import logger

from pingmonitor.automation.monitor_models import ProbeResult


class IcmpProbe:
    """Send one ICMP echo request per call using icmplib."""

    def __init__(
        self,
        address: str,
        timeout_ms: int = 120,
        payload_size: int = 32,
        privileged: bool = False,
    ):
        """
        Initialize the probe.

        Args:
            address: Host name or IP address to probe
            timeout_ms: How long to wait for the echo reply
            payload_size: ICMP payload size in bytes
            privileged: Use raw sockets (root) instead of unprivileged datagram sockets
        """
        self.address = address
        self.timeout_ms = timeout_ms
        self.payload_size = payload_size
        self.privileged = privileged

    @classmethod
    def from_settings(cls, settings) -> "IcmpProbe":
        return cls(
            address=settings.address,
            timeout_ms=settings.timeout_ms,
            payload_size=settings.payload_size,
            privileged=settings.privileged,
        )

    def probe(self) -> ProbeResult:
        try:
            host = ping(
                self.address,
                count=1,
                timeout=self.timeout_ms / 1000.0,
                payload_size=self.payload_size,
                privileged=self.privileged,
            )
        except (ICMPLibError, OSError) as e:
            logger.debug(f"ping {self.address} failed: {e}")
            return ProbeResult(success=False, status="send-failed")

        if not host.is_alive:
            return ProbeResult(success=False, status="no-reply")

        # icmplib reports round trip times in milliseconds
        return ProbeResult(success=True, latency_s=host.avg_rtt / 1000.0, status="reply")
