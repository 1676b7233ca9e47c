from .base import Base
from xdgini import RawLine
from xdgini.exceptions_warnings import (
    DuplicateEntryWarning,
    DuplicateGroupWarning,
    IniStructureWarning,
    MissingDelimiterWarning,
    UnclosedGroupHeaderWarning,
)
import warnings
import pytest


class TestRoundtrip:

    test_parameters = [
        # empty
        {"text": "", "expected": {}},
        # simple
        {
            "text": "[Foo]\nKey1=Value1\nKey2=Value2\n[Bar]\nKey3=Value3\n",
            "expected": {
                "Foo": {"Key1": "Value1", "Key2": "Value2"},
                "Bar": {"Key3": "Value3"},
            },
        },
        # without last newline
        {
            "text": "[Foo]\nKey1=Value1\nKey2=Value2\n[Bar]\nKey3=Value3",
            "expected": {
                "Foo": {"Key1": "Value1", "Key2": "Value2"},
                "Bar": {"Key3": "Value3"},
            },
        },
        # with comments and empty lines
        {
            "text": "\n# Comment 1\n\n[Foo]\n\n# Comment 2\n\nKey1=Value1\n\n# Comment 3"
            "\n\nKey2=Value2\n\n# Comment 4\n\n[Bar]\n\n# Comment 5\n\nKey3=Value3\n\n"
            "# Comment 6\n\n",
            "expected": {
                "Foo": {"Key1": "Value1", "Key2": "Value2"},
                "Bar": {"Key3": "Value3"},
            },
        },
        # only comments
        {"text": "# nothing to see\n\n# here", "expected": {}},
        # whitespace only lines
        {"text": "\t\n[Foo]\n  \nKey1=Value1\n \t \n", "expected": {"Foo": {"Key1": "Value1"}}},
        # with dummy groups
        {"text": "Key1=Value1\n", "expected": {"": {"Key1": "Value1"}}},
        {
            "text": "# top\nKey0=Value0\n\n[Foo]\nKey1=Value1\n",
            "expected": {"": {"Key0": "Value0"}, "Foo": {"Key1": "Value1"}},
        },
        # explicit empty group header
        {"text": "[]\nKey1=Value1\n", "expected": {"": {"Key1": "Value1"}}},
        # with broken group name
        {
            "text": "[Foo\nKey1=Value1\n",
            "warning": UnclosedGroupHeaderWarning,
            "expected": {"Foo": {"Key1": "Value1"}},
        },
        # with broken key-value pair
        {
            "text": "[Foo]\nBar\n",
            "warning": MissingDelimiterWarning,
            "expected": {"Foo": {"Bar": ""}},
        },
        # with trailing spaces
        {"text": "[Foo] \n Key1 = Value1 \n \n", "expected": {"Foo": {"Key1": "Value1"}}},
        # value holding the delimiter
        {
            "text": "[Desktop Entry]\nExec=env LANG=C app %f\n",
            "expected": {"Desktop Entry": {"Exec": "env LANG=C app %f"}},
        },
        # duplicate groups
        {
            "text": "[A]\na=1\n[B]\nb=1\n\n# again\n[A]\nc=1\n",
            "warning": DuplicateGroupWarning,
            "expected": {"A": {"a": "1", "c": "1"}, "B": {"b": "1"}},
        },
        # duplicate entries
        {
            "text": "[A]\nk=1\n# second\nk=2\n",
            "warning": DuplicateEntryWarning,
            "expected": {"A": {"k": "1"}},
        },
        # mimeapps.list
        {
            "text": "[Default Applications]\ntext/html=firefox.desktop\n"
            "x-scheme-handler/http=firefox.desktop\n\n[Added Associations]\n"
            "image/png=org.gnome.eog.desktop;gimp.desktop;\n",
            "expected": {
                "Default Applications": {
                    "text/html": "firefox.desktop",
                    "x-scheme-handler/http": "firefox.desktop",
                },
                "Added Associations": {
                    "image/png": "org.gnome.eog.desktop;gimp.desktop;"
                },
            },
        },
    ]

    @pytest.mark.parametrize(
        *Base.create_parametrization(Base.test_roundtrip, parameters=test_parameters)
    )
    def test_roundtrip(self, text, warning, expected):
        Base().test_roundtrip(text, warning, expected)

    @pytest.mark.parametrize(
        "text",
        [
            "",
            "[Foo]\nKey1=Value1\n",
            "\n# Comment\n\n[Foo]\n\nKey1=Value1\n\n",
            "Key1=Value1\n[Foo] \n Key2 = Value2",
        ],
    )
    def test_well_formed_input_warns_nothing(self, text):
        with warnings.catch_warnings():
            warnings.simplefilter("error", IniStructureWarning)
            Base().test_roundtrip(text)


class TestParse:

    def test_comment_attachment(self):
        configuration = Base().parse("# c1\n[Foo]\n\n# c2\nKey1=V1\n\n\n")
        assert configuration["Foo"].raws == [
            RawLine(10, "[Foo]\n", ["# c1\n"], ["\n"])
        ]
        assert configuration["Foo"]["Key1"].raws == [
            RawLine(20, "Key1=V1\n", ["# c2\n"], ["\n", "\n"])
        ]
        assert configuration.end == RawLine(30)

    def test_comment_breaks_trailing_blank_lines(self):
        configuration = Base().parse("[Foo]\n# c\n\n")
        assert configuration["Foo"].raws[0].trailing_comments == []
        assert configuration.end.trailing_comments == ["# c\n", "\n"]

    def test_leading_blank_lines_are_pending(self):
        configuration = Base().parse("\n\n[Foo]\n")
        assert configuration["Foo"].raws[0].leading_comments == ["\n", "\n"]

    def test_dummy_group(self):
        configuration = Base().parse("# c\nKey=V\n")
        assert configuration[""].raws == [RawLine(10, "")]
        assert configuration[""]["Key"].raws == [RawLine(20, "Key=V\n", ["# c\n"])]
        assert configuration.end_order == 30

    def test_order_keys_increase(self):
        configuration = Base().parse("[A]\na=1\nb=2\n[B]\nc=3\n")
        orders = [
            configuration["A"].raws[0].order,
            configuration["A"]["a"].raws[0].order,
            configuration["A"]["b"].raws[0].order,
            configuration["B"].raws[0].order,
            configuration["B"]["c"].raws[0].order,
            configuration.end_order,
        ]
        assert orders == [10, 20, 30, 40, 50, 60]

    def test_duplicates_keep_every_line(self):
        with pytest.warns(DuplicateGroupWarning):
            configuration = Base().parse("[A]\nk=1\n[B]\n[A]\n")
        assert [raw.line for raw in configuration["A"].raws] == ["[A]\n", "[A]\n"]
        with pytest.warns(DuplicateEntryWarning):
            configuration = Base().parse("[A]\nk=1\nk = 2\n")
        entry = configuration["A"]["k"]
        assert entry.value == "1"
        assert [raw.line for raw in entry.raws] == ["k=1\n", "k = 2\n"]

    def test_mapping_access(self):
        configuration = Base().parse("[Foo]\nKey1=Value1\nKey2=Value2\n[Bar]\n")
        assert "Foo" in configuration
        assert "Baz" not in configuration
        assert len(configuration) == 2
        assert set(configuration) == {"Foo", "Bar"}
        assert len(configuration["Foo"]) == 2
        assert "Key2" in configuration["Foo"]
        assert str(configuration) == configuration.render()
        with pytest.raises(KeyError):
            configuration["Baz"]
