"""Tests for review submission and deletion."""

from leaf_video.video.domain.models import VideoStatus
from leaf_video.video.infrastructure.orm import LikeRow, ResourceRow, VideoRow

from conftest import auth


class TestSubmitReview:
    """POST /api/v1/video/review/submit"""

    def test_requires_a_resource(self, client, seed, upload_video, author):
        vid = upload_video(title="Test")

        response = client.post("/api/v1/video/review/submit", json={"id": vid}, headers=auth(author))

        assert response.json()["code"] == 5002
        assert seed.video_row(vid).status == VideoStatus.CREATED_VIDEO

    def test_moves_video_to_waiting_review(self, client, seed, upload_video, author):
        vid = upload_video()
        seed.resource(vid, status=VideoStatus.VIDEO_PROCESSING)

        response = client.post("/api/v1/video/review/submit", json={"id": vid}, headers=auth(author))

        assert response.json() == {"code": 200, "message": "ok", "data": None}
        assert seed.video_row(vid).status == VideoStatus.WAITING_REVIEW

    def test_other_user_cannot_submit(self, client, seed, upload_video, other_user):
        vid = upload_video()
        seed.resource(vid)

        response = client.post("/api/v1/video/review/submit", json={"id": vid}, headers=auth(other_user))

        assert response.json()["code"] == 5001
        assert seed.video_row(vid).status == VideoStatus.CREATED_VIDEO

    def test_unbindable_body(self, client, author):
        response = client.post("/api/v1/video/review/submit", json={"id": "first"}, headers=auth(author))

        assert response.json()["code"] == 1001

    def test_id_beyond_integer_range(self, client, author):
        response = client.post("/api/v1/video/review/submit", json={"id": 10 ** 20}, headers=auth(author))

        assert response.json()["code"] == 1001

    def test_oversized_user_header_is_not_a_caller(self, client, upload_video):
        vid = upload_video()

        response = client.post("/api/v1/video/review/submit", json={"id": vid}, headers={"X-User-Id": str(10 ** 20)})

        assert response.json()["code"] == 1002


class TestDeleteVideo:
    """POST /api/v1/video/delete"""

    def test_author_deletes_video_resources_and_like(self, client, seed, upload_video, author):
        vid = upload_video()
        seed.resource(vid)

        response = client.post("/api/v1/video/delete", json={"id": vid}, headers=auth(author))

        assert response.json()["code"] == 200
        assert seed.count(VideoRow) == 0
        assert seed.count(ResourceRow) == 0
        assert seed.count(LikeRow) == 0

    def test_other_user_cannot_delete(self, client, seed, upload_video, other_user):
        vid = upload_video()

        response = client.post("/api/v1/video/delete", json={"id": vid}, headers=auth(other_user))

        assert response.json()["code"] == 5001
        assert seed.video_row(vid) is not None


class TestUploadThenReview:
    """Upload a video, then submit it before any resource is attached."""

    def test_scenario(self, client, seed, author, gaming):
        cover = seed.upload("/api/image/gaming_cover.png", author)

        upload = client.post(
            "/api/v1/video/info/upload",
            json={"title": "Test", "cover": cover, "partition": gaming},
            headers=auth(author),
        ).json()
        assert upload["code"] == 200
        vid = upload["data"]["vid"]

        review = client.post("/api/v1/video/review/submit", json={"id": vid}, headers=auth(author)).json()
        assert review["code"] == 5002
