"""
Tests for the studio generation flows against fake providers.
"""
import asyncio

import pytest

from admaker.catalog import STORYBOARD_PLACEHOLDERS, VALENTINE_SCENES
from admaker.jobs import PollPolicy
from admaker.providers.voices import VOICE_PRESETS
from admaker.studio import (
    AdSession,
    DecisionSession,
    FlowBusyError,
    FlowNotReadyError,
    FlowStatus,
    Selection,
    SessionNotFoundError,
    SessionStore,
    Studio,
    ValentineSession,
)


def _ad_session(**kwargs):
    selection = Selection(brand="Doritos", character="Darth Vader", slogan="Crunch time")
    return AdSession(selection, **kwargs)


class TestAdFlow:

    def test_requires_selections(self, studio):
        session = AdSession(Selection(brand="Doritos", character="Shrek"))

        with pytest.raises(FlowNotReadyError) as exc_info:
            studio.start_ad(session)

        assert exc_info.value.message == "Brand, character and slogan are required"
        assert session.state.status == FlowStatus.IDLE

    def test_generates_panels_voice_and_video(self, studio, fake_replicate, fake_elevenlabs):
        session = _ad_session(panels=["My own opening shot"])

        async def run():
            await studio.start_ad(session)

        asyncio.run(run())

        assert session.state.to_dict() == {"status": "done", "message": "Done!"}
        images = [panel.image for panel in session.panels]
        assert all(url and url.endswith(".webp") for url in images)
        assert len(set(images)) == 9

        # Panel text falls back to the placeholder for its slot
        assert fake_replicate.prompt_for(images[0]).startswith("My own opening shot. Character: Darth Vader.")
        assert fake_replicate.prompt_for(images[4]).startswith(STORYBOARD_PLACEHOLDERS[4])

        assert session.audio["ad"].startswith(b"ID3")
        assert fake_elevenlabs.voice_ids == [VOICE_PRESETS["deep"]]
        assert session.video_url.endswith(".mp4")
        assert "Storyboard: My own opening shot → " in fake_replicate.prompt_for(session.video_url)

    def test_voice_and_video_failures_are_skipped(self, studio, fake_replicate, fake_elevenlabs):
        fake_elevenlabs.status = 500
        fake_replicate.sequence = lambda pid, model: (
            [("failed", None)] if "video" in model else [("succeeded", [f"https://cdn.test/{pid}.webp"])]
        )
        session = _ad_session()

        async def run():
            await studio.start_ad(session)

        asyncio.run(run())

        assert session.state.status == FlowStatus.DONE
        assert session.has_images
        assert "ad" not in session.audio
        assert session.video_url is None

    def test_failed_panels_stay_empty(self, studio, fake_replicate):
        fake_replicate.sequence = lambda pid, model: [("failed", None)]
        session = _ad_session()

        async def run():
            await studio.start_ad(session)

        asyncio.run(run())

        assert session.state.status == FlowStatus.DONE
        assert not session.has_images

    def test_status_text_tracks_progress(self, studio):
        session = _ad_session()
        messages = []
        update = session.state.update

        def record(message):
            messages.append(message)
            update(message)

        session.state.update = record

        async def run():
            task = studio.start_ad(session)
            assert session.state.message == "Generating storyboard images..."
            await task

        asyncio.run(run())

        assert [m for m in messages if m.startswith("Generating panel ")] == [
            f"Generating panel {i}/9..." for i in range(1, 10)
        ]
        assert messages.index("Generating voice...") < messages.index("Generating video (this takes ~2 min)...")
        assert "Generating video... (0s)" in messages
        assert session.state.message == "Done!"

    def test_busy_flow_rejects_restart(self, studio):
        session = _ad_session()

        async def run():
            task = studio.start_ad(session)
            with pytest.raises(FlowBusyError):
                studio.start_ad(session)
            await task

        asyncio.run(run())

    def test_unexpected_error_puts_flow_in_error(self, studio, monkeypatch):
        session = _ad_session()

        def broken(*args):
            raise RuntimeError("template exploded")

        monkeypatch.setattr("admaker.studio.flows.build_ad_script", broken)

        async def run():
            await studio.start_ad(session)

        asyncio.run(run())

        assert session.state.to_dict() == {"status": "error", "message": "Error generating ad"}


    def test_discard_mid_batch_stops_provider_calls(self, studio, fake_replicate, fake_elevenlabs):
        store = SessionStore()
        session = store.add(_ad_session())

        async def run():
            task = studio.start_ad(session)
            while len(fake_replicate.submissions) < 3:
                await asyncio.sleep(0)
            submitted = len(fake_replicate.submissions)
            store.discard(session.id)
            await task
            return submitted

        submitted = asyncio.run(run())

        assert submitted < 9
        assert len(fake_replicate.submissions) == submitted
        assert fake_elevenlabs.requests == []
        assert session.video_url is None
        assert session.state.status == FlowStatus.GENERATING

    def test_closed_session_skips_voice_and_video(self, studio, fake_replicate, fake_elevenlabs):
        session = _ad_session()
        session.panels[0].image = "https://cdn.test/existing.webp"

        async def run():
            task = studio.start_tiktok(session)
            session.close()
            await task

        asyncio.run(run())

        assert fake_replicate.submissions == []
        assert fake_elevenlabs.requests == []
        assert session.tiktok_video_url is None
        assert session.tiktok_state.status == FlowStatus.GENERATING


class TestTikTokFlow:

    def test_requires_storyboard_images(self, studio):
        with pytest.raises(FlowNotReadyError) as exc_info:
            studio.start_tiktok(_ad_session())

        assert exc_info.value.message == "Generate storyboard images first"

    def test_generates_voiceover_and_video(self, studio, fake_replicate, fake_elevenlabs):
        session = _ad_session(panels=[f"panel {i}" for i in range(1, 10)])
        session.panels[0].image = "https://cdn.test/existing.webp"

        async def run():
            await studio.start_tiktok(session)

        asyncio.run(run())

        assert session.tiktok_state.to_dict() == {"status": "done", "message": "TikTok done!"}
        assert session.state.status == FlowStatus.IDLE
        assert session.audio["tiktok"].startswith(b"ID3")
        assert fake_elevenlabs.voice_ids == [VOICE_PRESETS["energetic"]]
        assert session.tiktok_video_url.endswith(".mp4")
        assert "The storyboard shows: panel 1." in fake_replicate.prompt_for(session.tiktok_video_url)


class TestDecisionFlow:

    def test_rejects_unknown_decision(self, studio):
        with pytest.raises(FlowNotReadyError):
            studio.start_decision(DecisionSession(), "lottery")

    def test_generates_image(self, studio, fake_replicate):
        session = DecisionSession()

        async def run():
            await studio.start_decision(session, "porsche")

        asyncio.run(run())

        assert session.state.status == FlowStatus.DONE
        assert session.decision == "porsche"
        assert session.image_url.endswith(".webp")
        assert "Porsche 911" in fake_replicate.prompt_for(session.image_url)

    def test_failure_moves_to_error(self, studio, fake_replicate):
        fake_replicate.submit_status = 500
        session = DecisionSession()

        async def run():
            await studio.start_decision(session, "save")

        asyncio.run(run())

        assert session.state.status == FlowStatus.ERROR
        assert session.image_url is None

    def test_reset_while_polling_drops_result(self, studio):
        session = DecisionSession()

        async def run():
            task = studio.start_decision(session, "sushi")
            await asyncio.sleep(0)
            session.reset()
            await task

        asyncio.run(run())

        assert session.state.status == FlowStatus.IDLE
        assert session.image_url is None
        assert session.decision is None


class TestValentineFlow:

    def test_generates_three_images_per_scene_then_plays(self, studio, fake_replicate):
        session = ValentineSession()
        announced = []

        async def run():
            task = studio.start_valentine(session)
            while not task.done():
                if session.state.message not in announced:
                    announced.append(session.state.message)
                await asyncio.sleep(0)
            result = session.slideshow.to_dict()
            session.close()
            return result

        slideshow = asyncio.run(run())

        assert session.state.to_dict() == {"status": "done", "message": "Done!"}
        assert len(fake_replicate.submissions) == 18
        for scene in session.scenes:
            assert len(scene.images) == 3
            assert all(image and fake_replicate.prompt_for(image).startswith(scene.text) for image in scene.images)

        assert announced[0] == "Starting generation..."
        assert "Generating scene 1/6..." in announced
        assert "Generating scene 6/6..." in announced

        assert slideshow["playing"] is True
        assert slideshow["total"] == 18
        assert slideshow["index"] == 0

    def test_edited_scene_text(self, studio, fake_replicate):
        session = ValentineSession(["One", "Two"])

        async def run():
            await studio.start_valentine(session, ["Edited one", "Two"])
            session.close()

        asyncio.run(run())

        assert [scene.text for scene in session.scenes] == ["Edited one", "Two"]
        assert fake_replicate.prompt_for(session.scenes[0].images[2]).startswith("Edited one.")

    def test_default_scenes(self):
        assert [scene.text for scene in ValentineSession().scenes] == list(VALENTINE_SCENES)

    def test_no_images_means_no_slideshow(self, studio, fake_replicate):
        fake_replicate.sequence = lambda pid, model: [("failed", None)]
        session = ValentineSession(["Only scene"])

        async def run():
            await studio.start_valentine(session)

        asyncio.run(run())

        assert session.state.status == FlowStatus.DONE
        assert session.all_images == []
        assert session.slideshow.playing is False


    def test_discard_stops_remaining_scenes(self, studio, fake_replicate):
        session = ValentineSession()

        async def run():
            task = studio.start_valentine(session)
            while len(fake_replicate.submissions) < 3:
                await asyncio.sleep(0)
            submitted = len(fake_replicate.submissions)
            session.close()
            await task
            return submitted

        submitted = asyncio.run(run())

        assert submitted < 18
        assert len(fake_replicate.submissions) == submitted
        assert session.state.status == FlowStatus.GENERATING
        assert session.slideshow.playing is False

    def test_regeneration_during_autoplay_delay_keeps_slideshow_off(self, gateway, fast_policy):
        studio = Studio(gateway, image_policy=fast_policy, video_policy=fast_policy, autoplay_delay=0.05)
        session = ValentineSession(["One"])

        async def run():
            first = studio.start_valentine(session)
            while session.state.status != FlowStatus.DONE:
                await asyncio.sleep(0)

            # Second run stays generating until the session is closed
            studio.image_poller.policy = PollPolicy(interval=30, max_attempts=5)
            second = studio.start_valentine(session, ["Two"])
            await first
            playing = session.slideshow.playing
            status = session.state.status

            session.close()
            await second
            return playing, status

        playing, status = asyncio.run(run())

        assert playing is False
        assert status == FlowStatus.GENERATING


class TestSessions:

    def test_escape_closes_zoom_and_slideshow(self):
        session = ValentineSession(["a"])
        session.scenes[0].images = ["u1", None, "u2"]
        session.slideshow.start(session.all_images)
        session.zoom("u1")

        assert session.handle_key("Escape") is True
        assert session.zoomed is None
        assert session.slideshow.playing is False
        assert session.handle_key("Escape") is False

    def test_store_lookup_by_kind(self):
        store = SessionStore()
        session = store.add(DecisionSession())

        assert store.get(session.id) is session
        assert store.get(session.id, DecisionSession) is session
        with pytest.raises(SessionNotFoundError):
            store.get(session.id, AdSession)
        with pytest.raises(SessionNotFoundError):
            store.get("missing")

    def test_discard_cancels_session(self):
        store = SessionStore()
        session = store.add(ValentineSession())

        store.discard(session.id)

        assert session.cancelled
        assert len(store) == 0
        with pytest.raises(SessionNotFoundError):
            store.discard(session.id)

    def test_ad_snapshot(self):
        session = _ad_session()
        session.audio["ad"] = b"ID3"

        snapshot = session.snapshot()

        assert snapshot["kind"] == "ad"
        assert snapshot["state"] == {"status": "idle", "message": ""}
        assert len(snapshot["panels"]) == 9
        assert snapshot["audio_url"] == f"/api/studio/sessions/{session.id}/audio/ad"
        assert snapshot["tiktok"]["audio_url"] is None


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


class TestSessionStoreEviction:

    def test_idle_sessions_expire(self):
        clock = FakeClock()
        store = SessionStore(ttl=60, clock=clock)
        stale = store.add(AdSession(Selection("Nike", "Batman", "Go")))
        stale.audio["ad"] = b"ID3"

        clock.now += 61
        fresh = store.add(DecisionSession())

        assert stale.id not in store
        assert stale.cancelled
        assert store.get(fresh.id) is fresh
        with pytest.raises(SessionNotFoundError):
            store.get(stale.id)

    def test_lookup_keeps_session_alive(self):
        clock = FakeClock()
        store = SessionStore(ttl=60, clock=clock)
        session = store.add(DecisionSession())

        clock.now += 50
        store.get(session.id)
        clock.now += 50

        assert store.evict_expired() == 0
        assert store.get(session.id) is session

    def test_capacity_evicts_least_recently_used(self):
        store = SessionStore(max_sessions=2, clock=FakeClock())
        first = store.add(DecisionSession())
        second = store.add(DecisionSession())
        store.get(first.id)

        third = store.add(DecisionSession())

        assert len(store) == 2
        assert second.id not in store
        assert second.cancelled
        assert first.id in store and third.id in store

    def test_rejects_empty_capacity(self):
        with pytest.raises(ValueError):
            SessionStore(max_sessions=0)
