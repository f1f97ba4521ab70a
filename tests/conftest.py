import os
import tempfile
from datetime import datetime, timedelta, timezone
from uuid import uuid4

# Must be set before `main` is imported: create_app() mounts the uploads dir.
os.environ.setdefault("UPLOADS_DIR", tempfile.mkdtemp(prefix="eliteclub-uploads-"))
os.environ.setdefault("JWT_SECRET", "test-secret")

import pytest
from fastapi.testclient import TestClient

from auth import dependencies as auth_dependencies
from core.errors import DuplicateError
from gallery import router as gallery_router
from games import router as games_router
from main import create_app
from reviews import router as reviews_router
from schedule import router as schedule_router
from verification import router as verification_router
from waitlist import router as waitlist_router


class FakeClock:
    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2024, 6, 1, 18, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


class FakeWaitlistRepository:
    def __init__(self, clock: FakeClock) -> None:
        self.clock = clock
        self.rows: dict = {}

    def _phone_taken(self, phone: str, *, exclude=None) -> bool:
        return any(row["phone"] == phone and row_id != exclude for row_id, row in self.rows.items())

    async def list_entries(self) -> list[dict]:
        return [dict(row) for row in self.rows.values()]

    async def get_entry(self, entry_id):
        row = self.rows.get(entry_id)
        return dict(row) if row is not None else None

    async def create_entry(self, *, first_name, last_initial, phone, game_type, sms_updates) -> dict:
        if self._phone_taken(phone):
            raise DuplicateError("Phone number already exists in the waitlist.")
        row = {
            "id": uuid4(),
            "first_name": first_name,
            "last_initial": last_initial,
            "phone": phone,
            "game_type": game_type,
            "sms_updates": sms_updates,
            "checked_in": False,
            "created_at": self.clock(),
        }
        self.rows[row["id"]] = row
        return dict(row)

    async def update_entry(self, entry_id, *, first_name, last_initial, phone, game_type):
        row = self.rows.get(entry_id)
        if row is None:
            return None
        if self._phone_taken(phone, exclude=entry_id):
            raise DuplicateError("Phone number already exists in the waitlist.")
        row.update(
            first_name=first_name,
            last_initial=last_initial,
            phone=phone,
            game_type=game_type,
            sms_updates=False,
            checked_in=False,
        )
        return dict(row)

    async def set_checked_in(self, entry_id):
        row = self.rows.get(entry_id)
        if row is None:
            return None
        row["checked_in"] = True
        return dict(row)

    async def reset_flags(self, entry_id):
        row = self.rows.get(entry_id)
        if row is None:
            return None
        row.update(sms_updates=False, checked_in=False)
        return dict(row)

    async def delete_entry(self, entry_id) -> bool:
        return self.rows.pop(entry_id, None) is not None

    async def delete_stale(self, *, cutoff) -> int:
        stale = [
            row_id
            for row_id, row in self.rows.items()
            if row["created_at"] <= cutoff and not row["checked_in"]
        ]
        for row_id in stale:
            del self.rows[row_id]
        return len(stale)


class FakeAdminUserRepository:
    def __init__(self) -> None:
        self.rows: dict = {}

    async def create_admin(self, *, name, email, password_hash) -> dict:
        email = email.strip().lower()
        if any(row["email"] == email for row in self.rows.values()):
            raise DuplicateError("User already exists")
        row = {
            "id": uuid4(),
            "name": name,
            "email": email,
            "password_hash": password_hash,
            "created_at": datetime.now(timezone.utc),
        }
        self.rows[row["id"]] = row
        return dict(row)

    async def get_admin_by_email(self, email):
        email = email.strip().lower()
        for row in self.rows.values():
            if row["email"] == email:
                return dict(row)
        return None

    async def get_admin_by_id(self, admin_id):
        row = self.rows.get(admin_id)
        return dict(row) if row is not None else None


class FakeGalleryRepository:
    def __init__(self) -> None:
        self.rows: dict = {}
        self.fail_writes = False

    async def list_items(self) -> list[dict]:
        return [dict(row) for row in self.rows.values()]

    async def get_item(self, item_id):
        row = self.rows.get(item_id)
        return dict(row) if row is not None else None

    async def create_item(self, *, title, description, image) -> dict:
        if self.fail_writes:
            raise ConnectionError("datastore unreachable")
        row = {
            "id": uuid4(),
            "title": title,
            "description": description,
            "image": image,
            "created_at": datetime.now(timezone.utc),
        }
        self.rows[row["id"]] = row
        return dict(row)

    async def update_item(self, item_id, *, title, description, image):
        if self.fail_writes:
            raise ConnectionError("datastore unreachable")
        row = self.rows.get(item_id)
        if row is None:
            return None
        row.update(title=title, description=description, image=image)
        return dict(row)

    async def delete_item(self, item_id) -> bool:
        return self.rows.pop(item_id, None) is not None


class FakeScheduleRepository:
    def __init__(self) -> None:
        self.rows: dict = {}
        self.games: dict = {}

    def _with_games(self, row: dict) -> dict:
        out = dict(row)
        out["games"] = [dict(g) for g in self.games.values() if g["schedule_id"] == row["id"]]
        return out

    def _insert_games(self, schedule_id, games: list[dict]) -> None:
        for game in games:
            game_id = uuid4()
            self.games[game_id] = {
                "id": game_id,
                "schedule_id": schedule_id,
                "type": game["type"],
                "limit": game.get("limit"),
            }

    async def list_schedules(self) -> list[dict]:
        return [self._with_games(row) for row in self.rows.values()]

    async def get_schedule(self, schedule_id):
        row = self.rows.get(schedule_id)
        return self._with_games(row) if row is not None else None

    async def list_games(self) -> list[dict]:
        return [dict(g) for g in self.games.values()]

    async def create_schedule(self, *, day, time, description, games) -> dict:
        row = {
            "id": uuid4(),
            "day": day,
            "time": time,
            "description": description,
            "created_at": datetime.now(timezone.utc),
        }
        self.rows[row["id"]] = row
        self._insert_games(row["id"], games)
        return self._with_games(row)

    async def replace_schedule(self, schedule_id, *, day, time, description, games):
        row = self.rows.get(schedule_id)
        if row is None:
            return None
        row.update(day=day, time=time, description=description)
        self.games = {k: g for k, g in self.games.items() if g["schedule_id"] != schedule_id}
        self._insert_games(schedule_id, games)
        return self._with_games(row)

    async def delete_schedule(self, schedule_id) -> bool:
        if self.rows.pop(schedule_id, None) is None:
            return False
        self.games = {k: g for k, g in self.games.items() if g["schedule_id"] != schedule_id}
        return True


class FakeGameRepository:
    def __init__(self) -> None:
        self.rows: dict = {}

    async def list_games(self) -> list[dict]:
        return [dict(row) for row in self.rows.values()]

    async def create_game(self, *, type, limit) -> dict:
        row = {"id": uuid4(), "type": type, "limit": limit}
        self.rows[row["id"]] = row
        return dict(row)

    async def update_game(self, game_id, *, type, limit):
        row = self.rows.get(game_id)
        if row is None:
            return None
        row.update(type=type, limit=limit)
        return dict(row)

    async def delete_game(self, game_id) -> bool:
        return self.rows.pop(game_id, None) is not None


class FakeReviewRepository:
    def __init__(self) -> None:
        self.rows: dict = {}

    async def list_reviews(self) -> list[dict]:
        return [dict(row) for row in self.rows.values()]

    async def create_review(self, *, name, review, rating) -> dict:
        row = {
            "id": uuid4(),
            "name": name,
            "review": review,
            "rating": rating,
            "created_at": datetime.now(timezone.utc),
        }
        self.rows[row["id"]] = row
        return dict(row)

    async def update_review(self, review_id, *, name, review, rating):
        row = self.rows.get(review_id)
        if row is None:
            return None
        row.update(name=name, review=review, rating=rating)
        return dict(row)

    async def delete_review(self, review_id) -> bool:
        return self.rows.pop(review_id, None) is not None


class FakeUserRepository:
    def __init__(self) -> None:
        self.rows: dict = {}

    async def get_user_by_phone(self, phone):
        row = self.rows.get(phone)
        return dict(row) if row is not None else None

    async def create_user(self, *, first_name, last_initial, phone, sms_updates) -> dict:
        if phone in self.rows:
            raise DuplicateError("User already exists")
        row = {
            "id": uuid4(),
            "first_name": first_name,
            "last_initial": last_initial,
            "phone": phone,
            "sms_updates": sms_updates,
            "created_at": datetime.now(timezone.utc),
        }
        self.rows[phone] = row
        return dict(row)


class Repositories:
    def __init__(self) -> None:
        self.clock = FakeClock()
        self.waitlist = FakeWaitlistRepository(self.clock)
        self.admins = FakeAdminUserRepository()
        self.gallery = FakeGalleryRepository()
        self.schedule = FakeScheduleRepository()
        self.games = FakeGameRepository()
        self.reviews = FakeReviewRepository()
        self.users = FakeUserRepository()


@pytest.fixture
def repos() -> Repositories:
    return Repositories()


@pytest.fixture
def app(repos):
    app = create_app()
    app.dependency_overrides[waitlist_router.get_repository] = lambda: repos.waitlist
    app.dependency_overrides[auth_dependencies.get_repository] = lambda: repos.admins
    app.dependency_overrides[gallery_router.get_repository] = lambda: repos.gallery
    app.dependency_overrides[schedule_router.get_repository] = lambda: repos.schedule
    app.dependency_overrides[games_router.get_repository] = lambda: repos.games
    app.dependency_overrides[reviews_router.get_repository] = lambda: repos.reviews
    app.dependency_overrides[verification_router.get_repository] = lambda: repos.users
    return app


@pytest.fixture
def client(app) -> TestClient:
    # No `with` block: the lifespan (DB pool, sweeper) is not started.
    return TestClient(app)
