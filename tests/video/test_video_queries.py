"""Tests for status polling and public video retrieval."""

import pytest

from leaf_video.video.domain.models import VideoStatus

from conftest import auth


class TestGetVideoStatus:
    """GET /api/v1/video/status"""

    def test_author_sees_every_resource(self, client, seed, upload_video, author):
        vid = upload_video()
        seed.resource(vid, url="/v/approved.m3u8", status=VideoStatus.AUDIT_APPROVED)
        seed.resource(vid, url="/v/processing.m3u8", status=VideoStatus.VIDEO_PROCESSING)

        response = client.get("/api/v1/video/status", params={"vid": vid}, headers=auth(author))

        body = response.json()
        assert body["code"] == 200
        video = body["data"]["video"]
        assert video["vid"] == vid
        assert video["title"] == "Test"
        assert video["status"] == VideoStatus.CREATED_VIDEO
        assert [r["url"] for r in video["resources"]] == ["/v/approved.m3u8", "/v/processing.m3u8"]
        assert video["resources"][1]["status"] == VideoStatus.VIDEO_PROCESSING

    def test_other_user_cannot_poll(self, client, upload_video, other_user):
        vid = upload_video()

        response = client.get("/api/v1/video/status", params={"vid": vid}, headers=auth(other_user))

        assert response.json()["code"] == 5001

    def test_missing_vid_defaults_to_nonexistent_video(self, client, author):
        response = client.get("/api/v1/video/status", headers=auth(author))

        assert response.json()["code"] == 5001

    def test_requires_caller_identity(self, client, upload_video):
        vid = upload_video()

        response = client.get("/api/v1/video/status", params={"vid": vid})

        assert response.json()["code"] == 1002


class TestGetVideoByID:
    """GET /api/v1/video/get"""

    @pytest.mark.parametrize("status", [
        VideoStatus.CREATED_VIDEO,
        VideoStatus.VIDEO_PROCESSING,
        VideoStatus.WAITING_REVIEW,
        VideoStatus.REVIEW_FAILED,
    ])
    def test_hides_videos_that_are_not_approved(self, client, seed, upload_video, status):
        vid = upload_video()
        seed.set_status(vid, status)

        response = client.get("/api/v1/video/get", params={"vid": vid})

        body = response.json()
        assert body["code"] == 5001
        assert body["data"] is None

    def test_missing_video(self, client):
        response = client.get("/api/v1/video/get", params={"vid": 12345})

        assert response.json()["code"] == 5001

    def test_non_numeric_vid(self, client):
        response = client.get("/api/v1/video/get", params={"vid": "abc"})

        assert response.json()["code"] == 1001

    def test_vid_beyond_integer_range(self, client):
        response = client.get("/api/v1/video/get", params={"vid": 10 ** 20})

        assert response.json()["code"] == 1001

    def test_negative_vid(self, client):
        assert client.get("/api/v1/video/get", params={"vid": -1}).json()["code"] == 1001

    def test_returns_author_clicks_and_public_resources(self, client, seed, upload_video, author):
        vid = upload_video()
        seed.resource(vid, url="/v/approved.m3u8", status=VideoStatus.AUDIT_APPROVED)
        seed.resource(vid, url="/v/failed.m3u8", status=VideoStatus.PROCESSING_FAIL)
        seed.set_status(vid, VideoStatus.AUDIT_APPROVED)

        response = client.get("/api/v1/video/get", params={"vid": vid})

        body = response.json()
        assert body["code"] == 200
        video = body["data"]["video"]
        assert video["vid"] == vid
        assert video["uid"] == author
        assert video["clicks"] == 1
        assert video["author"] == {"uid": author, "name": "alice", "avatar": "/api/image/alice.png", "sign": "hello"}
        assert [r["url"] for r in video["resources"]] == ["/v/approved.m3u8"]
        assert "status" not in video["resources"][0]

    def test_same_ip_counts_once_per_window(self, client, seed, upload_video, clock):
        vid = upload_video()
        seed.set_status(vid, VideoStatus.AUDIT_APPROVED)
        headers = {"X-Forwarded-For": "203.0.113.7"}

        first = client.get("/api/v1/video/get", params={"vid": vid}, headers=headers).json()
        clock.advance(minutes=29)
        second = client.get("/api/v1/video/get", params={"vid": vid}, headers=headers).json()

        assert first["data"]["video"]["clicks"] == 1
        assert second["data"]["video"]["clicks"] == 1
        assert seed.video_row(vid).clicks == 1

    def test_same_ip_counts_again_after_window(self, client, seed, upload_video, clock):
        vid = upload_video()
        seed.set_status(vid, VideoStatus.AUDIT_APPROVED)
        headers = {"X-Forwarded-For": "203.0.113.7"}

        client.get("/api/v1/video/get", params={"vid": vid}, headers=headers)
        clock.advance(minutes=30)
        response = client.get("/api/v1/video/get", params={"vid": vid}, headers=headers)

        assert response.json()["data"]["video"]["clicks"] == 2

    def test_different_ips_count_separately(self, client, seed, upload_video):
        vid = upload_video()
        seed.set_status(vid, VideoStatus.AUDIT_APPROVED)

        client.get("/api/v1/video/get", params={"vid": vid}, headers={"X-Forwarded-For": "203.0.113.7"})
        response = client.get("/api/v1/video/get", params={"vid": vid}, headers={"X-Forwarded-For": "198.51.100.2, 10.0.0.1"})

        assert response.json()["data"]["video"]["clicks"] == 2

    def test_rejected_request_does_not_count(self, client, seed, upload_video):
        vid = upload_video()

        client.get("/api/v1/video/get", params={"vid": vid})

        assert seed.video_row(vid).clicks == 0
