from .base import Base
from inistore import Document, Parameters
from inistore.exceptions_warnings import IniIOWarning, UnreconciledSectionWarning
import warnings
import pytest

SIMPLE = """\
[Core]
CPUCore = 1
GFXBackend = Vulkan

[Display]
Fullscreen = False
"""


def _write(path, text, encoding="utf-8"):
    path.write_bytes(text.encode(encoding))
    return path


class TestLoad:

    def test_sections_keys_and_values(self, tmp_path):
        document = Document()
        assert document.load(_write(tmp_path / "a.ini", SIMPLE))
        assert [sec.name for sec in document.sections] == ["Core", "Display"]
        assert document.get_if_exists("Core", "cpucore", value_type=int) == (True, 1)
        assert document.get_if_exists("Core", "GFXBACKEND") == (True, "Vulkan")
        assert document.get_if_exists("Display", "Fullscreen", True, bool) == (
            True,
            False,
        )

    def test_missing_file(self, tmp_path):
        document = Document()
        document.loads(SIMPLE)
        with pytest.warns(IniIOWarning):
            assert not document.load(tmp_path / "missing.ini")
        # failed loads leave the document untouched
        assert len(document) == 2

    def test_crlf_and_whitespace(self):
        document = Document()
        document.loads("\r\n  [ Core ]  \r\n\tKey  =  Value  \r\n\r\n   \r\n")
        assert document.get_if_exists("Core", "key") == (True, "Value")
        assert document.get_lines("Core") == (False, [])

    def test_lines_before_first_section_are_dropped(self):
        document = Document()
        document.loads("orphan = 1\n# comment\nloose\n[Core]\nk = v\n")
        assert [sec.name for sec in document] == ["Core"]
        assert document.get_keys("Core") == (True, ["k"])

    def test_header_with_trailing_text(self):
        document = Document()
        document.loads("[Core] # the core\n[A]B]\nk = v\n")
        assert "Core" in document
        assert document.get_if_exists("A", "k") == (True, "v")

    def test_bracket_without_closing_is_no_header(self):
        document = Document()
        document.loads("[Core]\n[broken\n[also = broken\n")
        assert [sec.name for sec in document] == ["Core"]
        assert document.get_lines("Core", remove_comments=False) == (
            True,
            ["[broken", "[also = broken"],
        )
        assert document.get_if_exists("Core", "[also") == (True, "broken")

    def test_non_pair_lines_become_raw_lines(self):
        document = Document()
        document.loads("[Gecko]\n# just a comment\nnot-a-pair-line\n= no key\n")
        assert document.get_lines("Gecko", remove_comments=False) == (
            True,
            ["# just a comment", "not-a-pair-line", "= no key"],
        )
        assert document.get_keys("Gecko") == (True, [])

    def test_comment_lines_with_delimiter_are_raw_lines(self):
        document = Document()
        document.loads("[Core]\n# key = value\n  #indented = 1\n")
        assert not document.exists("Core", "# key")
        assert document.get_lines("Core") == (True, [])
        assert document.get_lines("Core", remove_comments=False) == (
            True,
            ["# key = value", "  #indented = 1"],
        )

    @pytest.mark.parametrize(
        "line", ["$Infinite Health", "*enabled=1", "+0x80001234=0x1"]
    )
    def test_verbatim_prefixes(self, line):
        document = Document()
        document.loads(f"[OnFrame]\n{line}\n")
        assert document.get_lines("OnFrame", remove_comments=False) == (True, [line])
        assert document.get_keys("OnFrame") == (True, [])

    def test_commented_section_keeps_entries_and_lines(self):
        text = (
            "[SectionName]\nkey = value\n# comment line\n"
            "anotherkey=anothervalue  # trailing comment\n"
        )
        document = Document()
        document.loads(text)
        assert document.get_if_exists("SectionName", "key") == (True, "value")
        assert document.get_if_exists("SectionName", "anotherkey") == (
            True,
            "anothervalue",
        )
        assert document.get_lines("SectionName", remove_comments=False) == (
            True,
            ["key = value", "# comment line", "anotherkey=anothervalue  # trailing comment"],
        )
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            assert document.dumps() == text

        reread = Document()
        reread.loads(document.dumps())
        assert reread.get_keys("SectionName") == (True, ["key", "anotherkey"])

    def test_pure_pair_sections_have_no_lines(self):
        document = Document()
        document.loads("[Core]\na = 1\n\n[Notes]\n# note\nb = 2\n")
        assert document.get_lines("Core") == (False, [])
        assert document.get_lines("Notes", remove_comments=False) == (
            True,
            ["# note", "b = 2"],
        )

    def test_verbatim_prefixes_disabled(self):
        document = Document(Parameters(verbatim_prefixes=None))
        document.loads("[OnFrame]\n*enabled=1\n")
        assert document.get_if_exists("OnFrame", "*enabled") == (True, "1")

    def test_duplicate_sections_are_merged(self):
        document = Document()
        document.loads("[Core]\na = 1\n[Other]\n[Core]\nb = 2\na = 3\n")
        assert [sec.name for sec in document] == ["Core", "Other"]
        assert document.get_keys("Core") == (True, ["a", "b"])
        assert document.get_if_exists("Core", "a") == (True, "3")

    def test_section_names_are_case_sensitive(self):
        document = Document()
        document.loads("[core]\na = 1\n[Core]\na = 2\n")
        assert len(document) == 2
        assert document.get_if_exists("core", "a") == (True, "1")
        assert document.get_if_exists("Core", "a") == (True, "2")

    def test_replace(self):
        document = Document()
        document.loads(SIMPLE)
        document.loads("[New]\nk = v\n")
        assert [sec.name for sec in document] == ["New"]

    def test_merge(self, tmp_path):
        base = Base()
        base.add_section("Core")
        base.add_entry("1", "CPUCore")
        base.add_entry("Vulkan", "GFXBackend")
        base.add_section("Display")
        base.add_entry("False", "Fullscreen")
        defaults = base.export(tmp_path)

        override = Base()
        override.add_section("Audio")
        override.add_entry("50", "Volume")
        override.add_section("Core")
        override.add_entry("OGL", "gfxbackend")
        user = override.export(tmp_path)

        document = Document()
        assert document.load(defaults)
        assert document.load(user, keep_current_data=True)

        assert [sec.name for sec in document] == ["Core", "Display", "Audio"]
        assert document.get_if_exists("Core", "GFXBackend") == (True, "OGL")
        assert document.get_if_exists("Core", "CPUCore") == (True, "1")
        assert document.get_keys("Core") == (True, ["CPUCore", "GFXBackend"])
        assert document.get_if_exists("Display", "Fullscreen") == (True, "False")
        assert document.get_if_exists("Audio", "Volume", value_type=int) == (True, 50)

    def test_merge_into_runtime_sections(self):
        document = Document()
        document.get_or_create_section("Runtime").set("kept", "yes")
        document.loads("[Runtime]\nadded = 1\n", keep_current_data=True)
        assert document.get_keys("Runtime") == (True, ["kept", "added"])

    def test_merge_into_commented_section(self):
        document = Document()
        document.loads("[Core]\n# defaults\na = 1\nb = 2\n")
        document.loads("[Core]\nb = 3\n", keep_current_data=True)
        assert document.get_if_exists("Core", "b") == (True, "3")
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            dumped = document.dumps()
        assert dumped == "[Core]\n# defaults\na = 1\nb = 2\nb = 3\n"
        reread = Document()
        reread.loads(dumped)
        assert reread.get_if_exists("Core", "b") == (True, "3")

    def test_comment_merged_into_pair_section(self):
        document = Document()
        document.loads("[Core]\na = 1\n")
        document.loads("[Core]\n# user\nb = 2\n", keep_current_data=True)
        assert document.get_lines("Core", remove_comments=False) == (
            True,
            ["a = 1", "# user", "b = 2"],
        )
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            assert document.dumps() == "[Core]\na = 1\n# user\nb = 2\n"

    def test_encoding_fallback(self, tmp_path):
        text = "[General]\nNom = Élodie Müller à Besançon, vérifié\n" * 3
        path = _write(tmp_path / "latin.ini", text, "cp1252")
        document = Document()
        assert document.load(path)
        found, value = document.get_if_exists("General", "nom")
        assert found
        assert "Besan" in value

    def test_explicit_encoding(self, tmp_path):
        path = _write(tmp_path / "latin.ini", "[Ä]\nk = ö\n", "latin-1")
        document = Document(Parameters(encoding="latin-1"))
        assert document.load(path)
        assert document.get_if_exists("Ä", "k") == (True, "ö")

    def test_utf8_bom(self, tmp_path):
        path = tmp_path / "bom.ini"
        path.write_bytes(b"\xef\xbb\xbf[Core]\nk = v\n")
        document = Document()
        assert document.load(path)
        assert "Core" in document


class TestSave:

    def test_format(self, tmp_path):
        document = Document()
        core = document.get_or_create_section("Core")
        core.set("b", "2")
        core.set("A", "1")
        document.get_or_create_section("Empty")
        document.get_or_create_section("Raw").set_lines(["# note", "free text"])
        path = tmp_path / "out.ini"
        assert document.save(path)
        assert path.read_text(encoding="utf-8") == (
            "[Core]\nb = 2\nA = 1\n\n[Empty]\n\n[Raw]\n# note\nfree text\n"
        )

    def test_empty_document(self):
        assert Document().dumps() == ""

    def test_section_spacing(self):
        document = Document(Parameters(section_spacing=0))
        document.get_or_create_section("A").set("k", "1")
        document.get_or_create_section("B").set("k", "2")
        assert document.dumps() == "[A]\nk = 1\n[B]\nk = 2\n"

    def test_other_delimiter(self):
        document = Document(Parameters(option_delimiter=":"))
        document.get_or_create_section("A").set("k", "1")
        assert document.dumps() == "[A]\nk : 1\n"

    def test_empty_value(self):
        document = Document()
        document.get_or_create_section("A").set("k", "")
        assert document.dumps() == "[A]\nk =\n"

    @pytest.mark.parametrize(
        "value, written",
        [
            ("a # b", '"a # b"'),
            ("  padded", '"  padded"'),
            ('"quoted"', '""quoted""'),
            ('say "hi"', 'say "hi"'),
        ],
    )
    def test_quoting(self, value, written):
        document = Document()
        document.get_or_create_section("A").set("k", value)
        assert document.dumps() == f"[A]\nk = {written}\n"
        reread = Document()
        reread.loads(document.dumps())
        assert reread.get_if_exists("A", "k") == (True, value)

    def test_raw_mode_wins(self):
        document = Document()
        section = document.get_or_create_section("Mixed")
        section.set("k", "v")
        section.set_lines(["free text"])
        with pytest.warns(UnreconciledSectionWarning):
            assert document.dumps() == "[Mixed]\nfree text\n"

    def test_raw_lines_holding_entries_do_not_warn(self):
        document = Document()
        section = document.get_or_create_section("Mixed")
        section.set("k", "v")
        section.set_lines(["# note", "k = v"])
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            assert document.dumps() == "[Mixed]\n# note\nk = v\n"

    def test_changed_entry_of_raw_section_warns(self):
        document = Document()
        document.loads("[Mixed]\n# note\nk = v\n")
        document["Mixed"].set("k", "changed")
        with pytest.warns(UnreconciledSectionWarning):
            assert document.dumps() == "[Mixed]\n# note\nk = v\n"

    def test_unwritable(self, tmp_path):
        document = Document()
        document.loads(SIMPLE)
        with pytest.warns(IniIOWarning):
            assert not document.save(tmp_path / "missing_dir" / "out.ini")

    def test_raw_mode_preservation(self, tmp_path):
        path = _write(
            tmp_path / "gecko.ini", "[Gecko]\n# just a comment\nnot-a-pair-line\n"
        )
        document = Document()
        assert document.load(path)
        assert document.save(path)
        assert path.read_text(encoding="utf-8") == (
            "[Gecko]\n# just a comment\nnot-a-pair-line\n"
        )


class TestRoundTrip:

    def test_round_trip(self, tmp_path):
        document = Document()
        document.loads(SIMPLE)
        path = tmp_path / "out.ini"
        assert document.save(path)

        reread = Document()
        assert reread.load(path)
        assert [sec.name for sec in reread] == [sec.name for sec in document]
        for section in document:
            assert reread[section.name].values == section.values

    def test_idempotence(self, tmp_path):
        base = Base()
        for _ in range(3):
            base.add_section()
            for _ in range(3):
                base.add_entry()
        path = base.export(tmp_path)

        document = Document()
        assert document.load(path)
        first = tmp_path / "first.ini"
        assert document.save(first)

        reread = Document()
        assert reread.load(first)
        second = tmp_path / "second.ini"
        assert reread.save(second)
        assert first.read_bytes() == second.read_bytes()

    def test_idempotence_with_raw_sections(self):
        text = (
            "[Core]\nKey = Value # comment\nQuoted = \"a # b\"\n\n"
            "[Gecko]\n$Code\n*enabled\n# note\n"
        )
        document = Document()
        document.loads(text)
        first = document.dumps()
        reread = Document()
        reread.loads(first)
        assert reread.dumps() == first


    def test_idempotence_of_raw_lines_with_pairs(self):
        document = Document()
        document.set_lines("S", ["# c", "a=b", "x # trailing"])
        first = document.dumps()
        assert first == "[S]\n# c\na=b\nx # trailing\n"

        reread = Document()
        reread.loads(first)
        assert reread.get_if_exists("S", "a") == (True, "b")
        second = reread.dumps()
        assert second == first

        third = Document()
        third.loads(second)
        assert third.dumps() == first


class TestSections:

    def test_get_or_create(self):
        document = Document()
        core = document.get_or_create_section("Core")
        assert document.get_or_create_section("Core") is core
        assert document.get_or_create_section("core") is not core
        assert len(document) == 2

    def test_get_section(self):
        document = Document()
        assert document.get_section("Core") is None
        assert len(document) == 0
        core = document.get_or_create_section("Core")
        assert document.get_section("Core") is core
        assert document["Core"] is core
        with pytest.raises(KeyError):
            document["Missing"]

    def test_delete_section(self):
        document = Document()
        document.loads(SIMPLE)
        assert document.delete_section("Core")
        assert not document.delete_section("Core")
        assert [sec.name for sec in document] == ["Display"]

    def test_sort_sections(self):
        document = Document()
        for name in ("beta", "Gamma", "alpha", "Delta"):
            document.get_or_create_section(name)
        document.sort_sections()
        assert [sec.name for sec in document] == ["alpha", "beta", "Delta", "Gamma"]

    def test_clear(self):
        document = Document()
        document.loads(SIMPLE)
        document.clear()
        assert len(document) == 0
        assert "Core" not in document


class TestKeys:

    def test_exists(self):
        document = Document()
        document.loads(SIMPLE)
        assert document.exists("Core", "cpucore")
        assert not document.exists("Core", "missing")
        assert not document.exists("Missing", "cpucore")
        assert "Missing" not in document

    def test_get_if_exists_does_not_create(self):
        document = Document()
        assert document.get_if_exists("Missing", "k", 4, int) == (False, 4)
        assert "Missing" not in document

    def test_get_keys(self):
        document = Document()
        document.loads(SIMPLE)
        assert document.get_keys("Core") == (True, ["CPUCore", "GFXBackend"])
        assert document.get_keys("Missing") == (False, [])

    def test_delete_key(self):
        document = Document()
        document.loads(SIMPLE)
        assert not document.delete_key("Missing", "CPUCore")
        assert document.delete_key("Core", "cpucore")
        assert not document.delete_key("Core", "CPUCore")
        assert document.get_keys("Core") == (True, ["GFXBackend"])

    def test_lines(self):
        document = Document()
        document.set_lines("Gecko", ["$Code", "# note", "0x1 # value"])
        assert "Gecko" in document
        assert document.get_lines("Gecko") == (True, ["$Code", "0x1"])
        assert document.get_lines("Missing") == (False, [])
        assert "Missing" not in document

    def test_parse_line(self):
        assert Document.parse_line("  key =  value # c") == ("key", "value")
        assert Document.parse_line("no pair") is None
        assert Document.parse_line("# key = value") is None


def test_no_warnings_on_plain_files(tmp_path):
    path = _write(tmp_path / "a.ini", SIMPLE)
    document = Document()
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        assert document.load(path)
        assert document.save(path)
