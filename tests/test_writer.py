import json

from apidoc_postman.generator.collection import build_collection
from apidoc_postman.writer import write_collection


def _document():
    return build_collection(
        [{"group": "Users", "title": "Get user", "url": "/v1/users/:id", "type": "get"}],
        {"name": "demo"},
    )


class TestWriteCollection:
    def test_writes_postman_json(self, tmp_path):
        doc = _document()
        path = write_collection(doc, tmp_path / "doc")
        assert path == tmp_path / "doc" / "postman.json"
        assert json.loads(path.read_text(encoding="utf-8")) == doc.to_dict()

    def test_indent(self, tmp_path):
        path = write_collection(_document(), tmp_path, indent=2)
        assert path.read_text(encoding="utf-8").startswith('{\n  "info"')

    def test_simulate_creates_nothing(self, tmp_path):
        path = write_collection(_document(), tmp_path / "doc", simulate=True)
        assert not path.exists()
        assert not (tmp_path / "doc").exists()
