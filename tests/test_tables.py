"""Test table boundaries and header resolution."""
import pytest

from agsview.tables import NoEnclosingTable, iter_tables, locate_table, resolve_header

SAMPLE = '"GROUP""MYGROUP"\n"HEADING""COL1","COL2","COL3"\n"DATA","x","y"\n'

TWO_TABLES = '''"PROJ","preamble"
"GROUP","LOCA"
"HEADING","LOCA_ID","LOCA_GL"
"UNIT","","m"
"DATA","BH1","5.20"

"GROUP","GEOL"
"HEADING","LOCA_ID","GEOL_TOP","GEOL_BASE","GEOL_DESC","GEOL_LEG"
"DATA","BH1","0.00","1.50","Soft CLAY","101"
'''


def test_header_marker_without_comma():
    table = locate_table(SAMPLE, 0)
    assert table.name == "MYGROUP"
    assert resolve_header(table) == ["COL1", "COL2", "COL3"]


def test_header_standard_ags4_line():
    table = locate_table(TWO_TABLES, TWO_TABLES.index("BH1"))
    assert table.name == "LOCA"
    assert resolve_header(table) == ["LOCA_ID", "LOCA_GL"]


def test_locate_table_bounds():
    geol_start = TWO_TABLES.index('"GROUP","GEOL"')
    loca = locate_table(TWO_TABLES, TWO_TABLES.index('"UNIT"'))
    assert loca.start == TWO_TABLES.index('"GROUP","LOCA"')
    assert loca.end == geol_start
    geol = locate_table(TWO_TABLES, len(TWO_TABLES) - 3)
    assert geol.start == geol_start
    assert geol.end == len(TWO_TABLES)
    assert geol.name == "GEOL"


def test_group_line_itself_belongs_to_its_table():
    geol_start = TWO_TABLES.index('"GROUP","GEOL"')
    assert locate_table(TWO_TABLES, geol_start).start == geol_start
    assert locate_table(TWO_TABLES, geol_start + 5).start == geol_start
    # the newline before the GROUP line still belongs to the previous table
    assert locate_table(TWO_TABLES, geol_start - 1).name == "LOCA"


def test_offset_before_first_group():
    with pytest.raises(NoEnclosingTable):
        locate_table(TWO_TABLES, 3)


def test_no_group_anywhere():
    with pytest.raises(NoEnclosingTable) as exc:
        locate_table('"HEADING","A"\n"DATA","1"\n', 0)
    assert exc.value.offset == 0


def test_offset_out_of_range():
    with pytest.raises(ValueError):
        locate_table(SAMPLE, len(SAMPLE) + 1)
    with pytest.raises(ValueError):
        locate_table(SAMPLE, -1)


def test_end_of_document_offset():
    assert locate_table(SAMPLE, len(SAMPLE)).name == "MYGROUP"


def test_missing_heading_is_empty():
    doc = '"GROUP","NOTE"\n"DATA","a"\n"GROUP","X"\n"HEADING","LATE"\n'
    assert resolve_header(locate_table(doc, 0)) == []


def test_ranges_partition_document():
    first = TWO_TABLES.index('"GROUP"')
    seen = {}
    for offset in range(first, len(TWO_TABLES) + 1):
        t = locate_table(TWO_TABLES, offset)
        assert t.start <= offset <= t.end
        seen[t.start] = t.end
    ranges = sorted(seen.items())
    assert ranges[0][0] == first
    assert ranges[-1][1] == len(TWO_TABLES)
    for (_, end), (start, _) in zip(ranges, ranges[1:]):
        assert end == start
    assert [(t.start, t.end) for t in iter_tables(TWO_TABLES)] == ranges


def test_iter_tables_crlf():
    doc = '"GROUP","A"\r\n"HEADING","X"\r\n"GROUP","B"\r\n"HEADING","Y"\r\n'
    tables = list(iter_tables(doc))
    assert [t.name for t in tables] == ["A", "B"]
    assert resolve_header(tables[1]) == ["Y"]


def test_table_start_resolves_same_table():
    for table in iter_tables(TWO_TABLES):
        for offset in range(table.start, table.end):
            assert locate_table(TWO_TABLES, offset) == locate_table(TWO_TABLES, table.start)
