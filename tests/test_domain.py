import pytest

from tests.test_utils import get_test_logger

logger = get_test_logger(__name__)

from domain import (
    DirectoryConfig,
    DEFAULT_DATA_SOURCE,
    DATA_SOURCE_ENV_VAR,
    USERS_INITIALIZER_ENV_VAR,
    USERS_SET_SIZE_ENV_VAR,
)
from constraint_solvers.task_assigning.domain import Group, TaskData, User
from factory.data.formatters import users_to_dataframe, labels_to_dataframe
from utils.load_settings import load_settings


class TestDirectoryConfig:
    def test_defaults(self):
        config = DirectoryConfig()

        assert config.data_source == DEFAULT_DATA_SOURCE
        assert config.users_initializer is None
        assert config.users_set_size == "0"
        assert not config.seeding_enabled

    def test_blank_values_fall_back_to_defaults(self):
        config = DirectoryConfig(data_source="", users_initializer="  ", users_set_size="")

        assert config.data_source == DEFAULT_DATA_SOURCE
        assert config.users_initializer is None
        assert config.users_set_size == "0"

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv(DATA_SOURCE_ENV_VAR, "/data/directory.db")
        monkeypatch.setenv(USERS_INITIALIZER_ENV_VAR, "BenchmarksDBUsersInitializer")
        monkeypatch.setenv(USERS_SET_SIZE_ENV_VAR, "10")

        config = DirectoryConfig.from_env()

        assert config.data_source == "/data/directory.db"
        assert config.users_initializer == "BenchmarksDBUsersInitializer"
        assert config.users_set_size == "10"
        assert config.seeding_enabled

    def test_from_env_without_variables(self, monkeypatch):
        for name in (DATA_SOURCE_ENV_VAR, USERS_INITIALIZER_ENV_VAR, USERS_SET_SIZE_ENV_VAR):
            monkeypatch.delenv(name, raising=False)

        assert DirectoryConfig.from_env() == DirectoryConfig()


class TestUser:
    def test_equality_ignores_attributes(self):
        a = User("u1", frozenset({Group("HR")}), frozenset({"java"}), {"x": 1})
        b = User("u1", frozenset({Group("HR")}), frozenset({"java"}))

        assert a == b
        assert hash(a) == hash(b)

    def test_empty_entries_are_dropped(self):
        user = User("u1", frozenset({Group(""), Group("IT")}), frozenset({"", "sql"}))

        assert user.group_ids == {"IT"}
        assert user.skills == {"sql"}

    def test_empty_id_is_rejected(self):
        with pytest.raises(ValueError):
            User("")

    def test_dict_round_trip(self):
        user = User("u1", frozenset({Group("HR"), Group("user")}), frozenset({"java"}))

        assert user.to_dict() == {
            "id": "u1",
            "groups": ["HR", "user"],
            "skills": ["java"],
            "attributes": {},
        }
        assert User.from_dict(user.to_dict()) == user

    def test_task_data_from_dict(self):
        task = TaskData.from_dict({"task_id": 3, "input_data": {"skills": "java"}})

        assert task == TaskData(3, "", {"skills": "java"})


class TestFormatters:
    def test_users_to_dataframe(self):
        users = [
            User("u1", frozenset({Group("user"), Group("HR")}), frozenset({"sql", "java"})),
            User("u2"),
        ]

        df = users_to_dataframe(users)

        assert list(df.columns) == ["User", "Groups", "Skills"]
        assert df.to_dict("records") == [
            {"User": "u1", "Groups": "HR, user", "Skills": "java, sql"},
            {"User": "u2", "Groups": "", "Skills": ""},
        ]

    def test_empty_users_to_dataframe(self):
        df = users_to_dataframe([])

        assert df.empty
        assert list(df.columns) == ["User", "Groups", "Skills"]

    def test_labels_to_dataframe(self):
        df = labels_to_dataframe({"SKILLS": frozenset({"sql", "java"}), "AFFINITIES": frozenset({"a"})})

        assert df.to_dict("records") == [
            {"Label": "AFFINITIES", "Value": "a"},
            {"Label": "SKILLS", "Value": "java"},
            {"Label": "SKILLS", "Value": "sql"},
        ]


class TestLoadSettings:
    def test_settings_are_exported(self, tmp_path, monkeypatch):
        monkeypatch.setenv(USERS_INITIALIZER_ENV_VAR, "")
        monkeypatch.setenv(DATA_SOURCE_ENV_VAR, "unchanged")
        monkeypatch.setenv(USERS_SET_SIZE_ENV_VAR, "0")
        settings = tmp_path / "settings.py"
        settings.write_text(
            'USERS_INITIALIZER = "BenchmarksDBUsersInitializer"\nUSERS_SET_SIZE = 4\n'
        )

        assert load_settings(str(settings))

        config = DirectoryConfig.from_env()
        assert config.users_initializer == "BenchmarksDBUsersInitializer"
        assert config.users_set_size == "4"
        assert config.data_source == "unchanged"

    def test_missing_file(self, tmp_path):
        assert load_settings(str(tmp_path / "nope.py")) is False
