"""
Store persistence tests.

- First use initializes an empty collection
- Replace-all semantics, insertion order
- Lossless round trip
- Corrupt state surfaces as StorageError
"""

import json

import pytest

from email_scheduler.scheduler import EmailStore, EmailStatus, StorageError


class TestLoadAll:
    """Tests for EmailStore.load_all."""

    @pytest.mark.asyncio
    async def test_first_use_returns_empty_and_creates_file(self, store, data_file):
        """Missing file should yield [] and be initialized on disk."""
        assert not data_file.exists()

        emails = await store.load_all()

        assert emails == []
        assert data_file.exists()
        assert json.loads(data_file.read_text(encoding="utf-8")) == []

    @pytest.mark.asyncio
    async def test_preserves_insertion_order(self, store, make_email, populate):
        """Jobs come back in the order they were saved."""
        first = make_email(offset_seconds=300)
        second = make_email(offset_seconds=-300)
        third = make_email(offset_seconds=0)
        await populate(first, second, third)

        emails = await store.load_all()

        assert [e.id for e in emails] == [first.id, second.id, third.id]

    @pytest.mark.asyncio
    async def test_invalid_json_raises_storage_error(self, store, data_file):
        """Unparseable file should raise StorageError, not crash."""
        data_file.parent.mkdir(parents=True)
        data_file.write_text("{not json", encoding="utf-8")

        with pytest.raises(StorageError) as exc_info:
            await store.load_all()

        assert "invalid JSON" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_non_list_json_raises_storage_error(self, store, data_file):
        """A JSON object instead of an array is corrupt state."""
        data_file.parent.mkdir(parents=True)
        data_file.write_text('{"emails": []}', encoding="utf-8")

        with pytest.raises(StorageError):
            await store.load_all()

    @pytest.mark.asyncio
    async def test_malformed_record_raises_storage_error(self, store, data_file):
        """A record missing required keys is corrupt state."""
        data_file.parent.mkdir(parents=True)
        data_file.write_text('[{"id": "x"}]', encoding="utf-8")

        with pytest.raises(StorageError):
            await store.load_all()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("overrides", [
        {"scheduledTime": "not-a-date"},
        {"scheduledTime": 1767225600000},
        {"scheduledTime": "9999-12-31T23:00:00-05:00"},
        {"subject": 42},
        {"body": None},
        {"recipientEmail": ["a@b.com"]},
        {"sentAt": 0},
    ])
    async def test_bad_field_values_raise_storage_error(self, store, data_file, overrides):
        """A record whose fields cannot be read back as an EmailJob is corrupt state."""
        record = {
            "id": "x",
            "recipientEmail": "a@b.com",
            "subject": "Hi",
            "body": "Test",
            "scheduledTime": "2026-01-01T00:00:00.000Z",
            "status": "pending",
        }
        record.update(overrides)
        data_file.parent.mkdir(parents=True)
        data_file.write_text(json.dumps([record]), encoding="utf-8")

        with pytest.raises(StorageError) as exc_info:
            await store.load_all()

        assert "malformed email record" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_non_object_record_raises_storage_error(self, store, data_file):
        data_file.parent.mkdir(parents=True)
        data_file.write_text('["just a string"]', encoding="utf-8")

        with pytest.raises(StorageError):
            await store.load_all()

    @pytest.mark.asyncio
    async def test_corrupt_file_is_left_untouched(self, store, data_file):
        """Loading corrupt state must not overwrite it."""
        data_file.parent.mkdir(parents=True)
        data_file.write_text("garbage", encoding="utf-8")

        with pytest.raises(StorageError):
            await store.load_all()

        assert data_file.read_text(encoding="utf-8") == "garbage"


class TestSaveAll:
    """Tests for EmailStore.save_all."""

    @pytest.mark.asyncio
    async def test_overwrites_instead_of_appending(self, store, make_email):
        """save_all replaces the whole collection."""
        await store.save_all([make_email(), make_email()])
        replacement = make_email()

        await store.save_all([replacement])

        emails = await store.load_all()
        assert [e.id for e in emails] == [replacement.id]

    @pytest.mark.asyncio
    async def test_round_trip_is_lossless(self, store, data_file, make_email, mock_clock):
        """save_all(load_all()) leaves persisted content unchanged."""
        pending = make_email()
        sent = make_email(offset_seconds=-60).mark_sent(mock_clock.now())
        await store.save_all([pending, sent])
        before = data_file.read_text(encoding="utf-8")

        await store.save_all(await store.load_all())

        assert data_file.read_text(encoding="utf-8") == before
        reloaded = await store.load_all()
        assert reloaded == [pending, sent]
        assert reloaded[1].status == EmailStatus.SENT

    @pytest.mark.asyncio
    async def test_round_trip_keeps_legacy_records_unchanged(self, store, data_file):
        """Records written without createdAt/sentAt are not rewritten with them."""
        records = [{
            "id": "legacy-1",
            "recipientEmail": "a@b.com",
            "subject": "Hi",
            "body": "Test",
            "scheduledTime": "2026-01-01T00:00:00.000Z",
            "status": "pending",
        }]
        data_file.parent.mkdir(parents=True)
        data_file.write_text(json.dumps(records, indent=2), encoding="utf-8")

        await store.save_all(await store.load_all())

        assert json.loads(data_file.read_text(encoding="utf-8")) == records

    @pytest.mark.asyncio
    async def test_no_temp_files_left_behind(self, store, data_file, make_email):
        """Atomic replace should leave only the target file."""
        await store.save_all([make_email()])

        assert [p.name for p in data_file.parent.iterdir()] == ["emails.json"]

    @pytest.mark.asyncio
    async def test_unwritable_location_raises_storage_error(self, tmp_path, make_email):
        """Write failures surface as StorageError."""
        blocker = tmp_path / "blocker"
        blocker.write_text("", encoding="utf-8")
        store = EmailStore(blocker / "emails.json")

        with pytest.raises(StorageError):
            await store.save_all([make_email()])

    @pytest.mark.asyncio
    async def test_unicode_content_preserved(self, store, make_email):
        """Non-ASCII subjects and bodies survive storage."""
        email = make_email(subject="안녕하세요", body="Grüße ✉")
        await store.save_all([email])

        loaded = await store.load_all()

        assert loaded[0].subject == "안녕하세요"
        assert loaded[0].body == "Grüße ✉"
