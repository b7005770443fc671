"""Tests for editing video metadata."""

from conftest import auth


MODIFY_URL = "/api/v1/video/info/modify"


class TestModifyVideoInfo:
    """POST /api/v1/video/info/modify"""

    def test_author_updates_fields_keeping_cover(self, client, seed, upload_video, author):
        vid = upload_video()
        cover = seed.video_row(vid).cover

        response = client.post(
            MODIFY_URL,
            json={"vid": vid, "title": "Renamed", "cover": cover, "desc": "new desc", "copyright": True, "tags": "x"},
            headers=auth(author),
        )

        body = response.json()
        assert body == {"code": 200, "message": "ok", "data": None}
        row = seed.video_row(vid)
        assert row.title == "Renamed"
        assert row.desc == "new desc"
        assert row.copyright is True
        assert row.tags == "x"

    def test_author_changes_cover_to_own_upload(self, client, seed, upload_video, author):
        vid = upload_video()
        new_cover = seed.upload("/api/image/new_cover.png", author)

        response = client.post(MODIFY_URL, json={"vid": vid, "title": "Test", "cover": new_cover}, headers=auth(author))

        assert response.json()["code"] == 200
        assert seed.video_row(vid).cover == new_cover

    def test_author_cannot_use_foreign_cover(self, client, seed, upload_video, author, other_user):
        vid = upload_video()
        old_cover = seed.video_row(vid).cover
        foreign_cover = seed.upload("/api/image/bobs.png", other_user)

        response = client.post(MODIFY_URL, json={"vid": vid, "title": "Test", "cover": foreign_cover}, headers=auth(author))

        assert response.json()["code"] == 3001
        assert seed.video_row(vid).cover == old_cover

    def test_non_author_gets_video_not_exist(self, client, seed, upload_video, other_user):
        vid = upload_video()
        own_cover = seed.upload("/api/image/bobs.png", other_user)

        response = client.post(MODIFY_URL, json={"vid": vid, "title": "Hijacked", "cover": own_cover}, headers=auth(other_user))

        assert response.json()["code"] == 5001
        assert seed.video_row(vid).title == "Test"

    def test_non_author_with_unchanged_cover_is_rejected(self, client, seed, upload_video, other_user):
        vid = upload_video()
        cover = seed.video_row(vid).cover

        response = client.post(MODIFY_URL, json={"vid": vid, "title": "Hijacked", "cover": cover}, headers=auth(other_user))

        assert response.json()["code"] == 5001
        assert seed.video_row(vid).title == "Test"

    def test_missing_video(self, client, author):
        response = client.post(MODIFY_URL, json={"vid": 404, "title": "Test", "cover": "/x.png"}, headers=auth(author))

        assert response.json()["code"] == 5001

    def test_invalid_title(self, client, seed, upload_video, author):
        vid = upload_video()
        cover = seed.video_row(vid).cover

        response = client.post(MODIFY_URL, json={"vid": vid, "title": "", "cover": cover}, headers=auth(author))

        assert response.json()["code"] == 1001

    def test_missing_vid(self, client, author):
        response = client.post(MODIFY_URL, json={"title": "Test", "cover": "/x.png"}, headers=auth(author))

        assert response.json()["code"] == 1001
