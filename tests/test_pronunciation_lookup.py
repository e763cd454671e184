from pathlib import Path

import yaml

from hanzi_sheet.services.pronunciation_lookup import DictionaryLookup, PinyinLookup, default_lookup


def test_dictionary_entry_shapes():
    d = DictionaryLookup(
        {
            "好": ["hǎo", "hào"],
            "长": "cháng, zhǎng",
            "行": {"pinyin": "xíng/háng", "definition": "to walk"},
            "坏": 42,
        }
    )
    assert len(d) == 3
    out = d("好长行坏a")
    assert out == {
        "好": ["hǎo", "hào"],
        "长": ["cháng", "zhǎng"],
        "行": ["xíng", "háng"],
        "坏": [],
    }


def test_dictionary_from_yaml(tmp_path: Path):
    p = tmp_path / "dict.yaml"
    p.write_text(yaml.safe_dump({"你": ["nǐ"]}, allow_unicode=True), encoding="utf-8")
    d = DictionaryLookup.from_yaml(p)
    assert d("你你") == {"你": ["nǐ"]}


def test_dictionary_from_malformed_yaml(tmp_path: Path):
    p = tmp_path / "dict.yaml"
    p.write_text("- [unclosed", encoding="utf-8")
    assert len(DictionaryLookup.from_yaml(p)) == 0


def test_default_lookup_prefers_configured_dictionary(tmp_path: Path):
    p = tmp_path / "dict.yaml"
    p.write_text(yaml.safe_dump({"你": ["nǐ"]}, allow_unicode=True), encoding="utf-8")
    assert isinstance(default_lookup(p), DictionaryLookup)
    assert isinstance(default_lookup(None), PinyinLookup)
    assert isinstance(default_lookup(tmp_path / "missing.yaml"), PinyinLookup)


def test_pinyin_lookup_readings():
    out = PinyinLookup()("你好abc")
    assert set(out) == {"你", "好"}
    assert out["你"][0] == "nǐ"
    assert "hǎo" in out["好"]
