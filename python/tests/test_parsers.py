"""Tests for loading configuration snapshots."""

import json
from unittest.mock import MagicMock, Mock, patch

import pytest
import requests

from mfgraph.graph_builder import build_dependency_graph
from mfgraph.parsers import ConfigInputError, FileParser


SNAPSHOT = {
    "/work/shop": [
        {
            "name": "shell",
            "configType": "webpack",
            "configPath": "/work/shop/webpack.config.js",
            "remotes": [
                {"name": "catalog", "url": "http://localhost:3001/remoteEntry.js", "configType": "webpack"},
                "checkout",
            ],
            "exposes": [],
            "shared": [{"name": "react", "version": "18.2.0"}, "react-dom"],
        },
        {
            "name": "catalog",
            "configType": "vite",
            "exposes": {"./List": "./src/List.tsx"},
            "shared": {"react": {"singleton": True, "requiredVersion": "^18.0.0"}, "lodash": "4.17.21"},
        },
    ]
}


class TestParseConfigs:

    def test_root_mapping(self):
        configs = FileParser.parse_configs(SNAPSHOT)

        assert list(configs) == ["/work/shop"]
        shell, catalog = configs["/work/shop"]

        assert shell.name == "shell"
        assert shell.root_path == "/work/shop"
        assert shell.config_path == "/work/shop/webpack.config.js"
        assert [r.name for r in shell.remotes] == ["catalog", "checkout"]
        assert shell.remotes[0].url == "http://localhost:3001/remoteEntry.js"
        assert shell.remotes[1].url is None
        assert shell.shared[0].version == "18.2.0"
        assert shell.shared[1].name == "react-dom"
        assert shell.shared[1].version is None

        assert catalog.config_type == "vite"
        assert catalog.remotes == []
        assert catalog.exposes[0].name == "./List"
        assert catalog.exposes[0].path == "./src/List.tsx"
        assert catalog.shared[0].required_version == "^18.0.0"
        assert catalog.shared[0].singleton is True
        assert catalog.shared[1].version == "4.17.21"

    def test_roots_wrapper(self):
        configs = FileParser.parse_configs({"roots": SNAPSHOT})
        assert len(configs["/work/shop"]) == 2

    def test_flat_list_grouped_by_root(self):
        configs = FileParser.parse_configs([
            {"name": "a", "rootPath": "/r1"},
            {"name": "b", "rootPath": "/r2"},
            {"name": "c", "rootPath": "/r1"},
        ])
        assert {root: [c.name for c in cfgs] for root, cfgs in configs.items()} == {"/r1": ["a", "c"], "/r2": ["b"]}

    def test_missing_optional_fields(self):
        configs = FileParser.parse_configs({"/r": [{"name": "bare"}]})
        config = configs["/r"][0]
        assert config.config_type == "webpack"
        assert config.remotes == []
        assert config.exposes == []
        assert config.shared == []

    def test_missing_name_kept_empty(self):
        configs = FileParser.parse_configs({"/r": [{"configType": "vite"}]})
        assert configs["/r"][0].name == ""

    def test_empty(self):
        assert FileParser.parse_configs({}) == {}

    def test_false_versions_are_absent(self):
        configs = FileParser.parse_configs({"/r": [
            {"name": "a", "shared": {"react": {"singleton": True, "requiredVersion": False}}},
            {"name": "b", "shared": [{"name": "react", "version": False, "requiredVersion": False}]},
        ]})
        a, b = configs["/r"]

        assert a.shared[0].required_version is None
        assert a.shared[0].singleton is True
        assert b.shared[0].version is None
        assert b.shared[0].required_version is None

        graph = build_dependency_graph(configs)
        assert graph.get_node("shared-react").version is None

    def test_exposes_object_with_import(self):
        configs = FileParser.parse_configs({"/r": [{"name": "ui", "exposes": {
            "./Button": {"import": "./src/Button"},
            "./Card": {"import": ["./src/Card", "./src/Card.css"]},
            "./Icon": "./src/Icon",
        }}]})

        exposes = configs["/r"][0].exposes
        assert [(e.name, e.path) for e in exposes] == [
            ("./Button", "./src/Button"),
            ("./Card", "./src/Card"),
            ("./Icon", "./src/Icon"),
        ]

    @pytest.mark.parametrize("data", [
        "not a snapshot",
        {"/r": {"name": "x"}},
        {"/r": ["x"]},
        {"/r": [{"name": "x", "remotes": "catalog"}]},
        {"/r": [{"name": "x", "shared": [42]}]},
        [{"name": "no-root"}],
    ])
    def test_invalid(self, data):
        with pytest.raises(ConfigInputError):
            FileParser.parse_configs(data)


class TestParseConfigFile:

    def test_local_file(self, tmp_path):
        path = tmp_path / "snapshot.json"
        path.write_text(json.dumps(SNAPSHOT))

        configs = FileParser.parse_config_file(str(path))
        assert len(configs["/work/shop"]) == 2

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "snapshot.json"
        path.write_text("{not json")

        with pytest.raises(ConfigInputError, match="not valid JSON"):
            FileParser.parse_config_file(str(path))

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            FileParser.parse_config_file(str(tmp_path / "missing.json"))

    @patch('mfgraph.ssl_config.requests.Session')
    def test_url(self, mock_session_class):
        mock_session = MagicMock()
        mock_session.__enter__.return_value = mock_session
        mock_response = Mock()
        mock_response.text = json.dumps(SNAPSHOT)
        mock_session.get.return_value = mock_response
        mock_session_class.return_value = mock_session

        configs = FileParser.parse_config_file("https://ci.example.com/mf-snapshot.json")

        mock_session.get.assert_called_once()
        assert mock_session.get.call_args[0][0] == "https://ci.example.com/mf-snapshot.json"
        mock_response.raise_for_status.assert_called_once()
        assert len(configs["/work/shop"]) == 2

    @patch('mfgraph.ssl_config.requests.Session')
    def test_url_http_error(self, mock_session_class):
        mock_session = MagicMock()
        mock_session.__enter__.return_value = mock_session
        mock_response = Mock()
        mock_response.raise_for_status.side_effect = requests.HTTPError("404 Client Error")
        mock_session.get.return_value = mock_response
        mock_session_class.return_value = mock_session

        with pytest.raises(requests.HTTPError):
            FileParser.parse_config_file("https://ci.example.com/missing.json")


class TestParseGraphFile:

    def test_not_a_graph(self, tmp_path):
        path = tmp_path / "graph.json"
        path.write_text(json.dumps({"hello": "world"}))

        with pytest.raises(ConfigInputError, match="does not contain a dependency graph"):
            FileParser.parse_graph_file(str(path))
