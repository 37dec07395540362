import os
import pytest

from pingmonitor.automation.icmp_probe import IcmpProbe

skip_net = os.environ.get("SKIP_NETWORK_TESTS") == "1"

@pytest.mark.skipif(skip_net, reason="Skipping network tests in CI by default")
def test_loopback_probe_never_raises():
    # Unprivileged ICMP may be blocked by the host; the probe reports that as send-failed.
    result = IcmpProbe("127.0.0.1", timeout_ms=1000).probe()
    assert result.status in ("reply", "no-reply", "send-failed")
    assert result.success == (result.status == "reply")
