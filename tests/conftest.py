"""
Pytest configuration and fixtures for Admaker tests.
"""
import json
import os

import httpx
import pytest

# Set test environment before importing admaker modules
os.environ["REPLICATE_API_TOKEN"] = "test-replicate-token"
os.environ["ELEVENLABS_API_KEY"] = "test-elevenlabs-key"
os.environ["DEBUG"] = "true"

FAKE_AUDIO = b"ID3\x04\x00fake-mp3-bytes"


class FakeReplicate:
    """
    In-memory Replicate predictions API.

    Every prediction answers ``processing`` on its first fetch and
    ``succeeded`` afterwards, unless ``sequence`` is replaced.
    """

    def __init__(self):
        self.requests = []
        self.created = {}
        self.counter = 0
        self.submit_status = 201
        self.poll_status = 200
        self.unreachable = False
        self._fetches = {}
        self.sequence = self.default_sequence

    @staticmethod
    def default_sequence(prediction_id: str, model: str):
        output = f"https://cdn.test/{prediction_id}.mp4" if "video" in model else [f"https://cdn.test/{prediction_id}.webp"]
        return [("processing", None), ("succeeded", output)]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        if self.unreachable:
            raise httpx.ConnectError("connection refused", request=request)

        if request.method == "POST" and path.endswith("/predictions"):
            if self.submit_status >= 400:
                return httpx.Response(self.submit_status, text="upstream exploded: secret-detail")
            self.counter += 1
            prediction_id = f"pred-{self.counter}"
            model = path.split("/models/", 1)[1].rsplit("/predictions", 1)[0]
            self.created[prediction_id] = {
                "model": model,
                "input": json.loads(request.content)["input"],
            }
            return httpx.Response(201, json={"id": prediction_id, "status": "starting"})

        if request.method == "GET" and "/predictions/" in path:
            if self.poll_status >= 400:
                return httpx.Response(self.poll_status, text="upstream poll error: secret-detail")
            prediction_id = path.rsplit("/", 1)[1]
            model = self.created.get(prediction_id, {}).get("model", "")
            steps = self.sequence(prediction_id, model)
            fetch = self._fetches.get(prediction_id, 0)
            self._fetches[prediction_id] = fetch + 1
            status, output = steps[min(fetch, len(steps) - 1)]
            return httpx.Response(200, json={
                "id": prediction_id,
                "status": status,
                "output": output,
                "error": "generation failed" if status == "failed" else None,
            })

        return httpx.Response(404, json={"detail": "not found"})

    @property
    def submissions(self):
        return [r for r in self.requests if r.method == "POST"]

    @property
    def polls(self):
        return [r for r in self.requests if r.method == "GET"]

    def prompt_for(self, url: str) -> str:
        """Prompt of the prediction that produced ``url``."""
        prediction_id = url.rsplit("/", 1)[1].split(".")[0]
        return self.created[prediction_id]["input"]["prompt"]


class FakeElevenLabs:
    """In-memory ElevenLabs text-to-speech API."""

    def __init__(self):
        self.requests = []
        self.status = 200

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.status >= 400:
            return httpx.Response(self.status, text='{"detail": "invalid api key"}')
        return httpx.Response(200, content=FAKE_AUDIO, headers={"Content-Type": "audio/mpeg"})

    @property
    def voice_ids(self):
        return [r.url.path.rsplit("/", 1)[1] for r in self.requests]


@pytest.fixture
def fake_replicate():
    return FakeReplicate()


@pytest.fixture
def fake_elevenlabs():
    return FakeElevenLabs()


@pytest.fixture
def gateway(fake_replicate, fake_elevenlabs):
    """ProviderGateway wired to the fake providers."""
    from admaker.providers import ElevenLabsProvider, ReplicateClient
    from admaker.services.gateway import ProviderGateway

    return ProviderGateway(
        replicate=ReplicateClient(
            api_token="test-replicate-token",
            transport=httpx.MockTransport(fake_replicate.handler),
        ),
        voice=ElevenLabsProvider(
            api_key="test-elevenlabs-key",
            transport=httpx.MockTransport(fake_elevenlabs.handler),
        ),
    )


@pytest.fixture
def fast_policy():
    """Poll without sleeping."""
    from admaker.jobs import PollPolicy
    return PollPolicy(interval=0, max_attempts=5)


@pytest.fixture
def studio(gateway, fast_policy):
    from admaker.studio import Studio
    return Studio(gateway, image_policy=fast_policy, video_policy=fast_policy, autoplay_delay=0)


@pytest.fixture
def test_client(gateway, studio):
    """TestClient with the gateway and studio pointed at the fakes."""
    from fastapi.testclient import TestClient

    from admaker.api.dependencies import get_gateway, get_session_store, get_studio
    from admaker.api.main import app
    from admaker.studio import SessionStore

    store = SessionStore()
    app.dependency_overrides[get_gateway] = lambda: gateway
    app.dependency_overrides[get_studio] = lambda: studio
    app.dependency_overrides[get_session_store] = lambda: store

    with TestClient(app) as client:
        yield client

    app.dependency_overrides.clear()
