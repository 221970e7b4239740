from scholarguard.utils.gateway import AnalysisGateway, GatewayConfig


class FakeAPIError(Exception):
    """Mimics the upstream SDK error: a numeric code plus a free-form message."""

    def __init__(self, code, message):
        super().__init__(f"{code} {message}")
        self.code = code


class FakeBackend:
    """Replays scripted outcomes: strings are returned, exceptions raised."""

    def __init__(self, *outcomes):
        self.outcomes = list(outcomes)
        self.calls = []

    async def generate(self, prompt, config):
        self.calls.append((prompt, config))
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


class FakeSleep:
    def __init__(self):
        self.delays = []

    async def __call__(self, seconds):
        self.delays.append(seconds)


def make_gateway(*outcomes, api_key="test-key"):
    backend = FakeBackend(*outcomes)
    sleep = FakeSleep()
    gateway = AnalysisGateway(GatewayConfig(api_key=api_key), backend=backend, sleep=sleep)
    return gateway, backend, sleep
