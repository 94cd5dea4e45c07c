from mbfea.snapshots import write_facets, write_facets_ntn


def _lines(path):
    return path.read_text(encoding="utf-8").split("\n")


def test_write_facets_layout(tmp_path):
    path = tmp_path / "facets-12.txt"
    write_facets(path, 12, {(1, 0): [8, 9], (0, 1): [3, 5, 7]})
    lines = _lines(path)
    assert lines[0] == "Basic_data:"
    assert lines[1] == "timeStep\t12"
    assert lines[2] == "" and lines[3] == ""
    assert lines[4].startswith("Facets_data: (in the smNodes")
    assert lines[5] == "sMesh  mMeshsmNodes"
    assert lines[6].split() == ["0", "1", "3", "5", "7"]
    assert lines[7].split() == ["1", "0", "8", "9"]
    assert len(lines[6]) == 1 + 7 * 4
    assert lines[-1] == "EOF"


def test_write_facets_empty(tmp_path):
    path = tmp_path / "facets.txt"
    write_facets(path, 0, {})
    text = path.read_text(encoding="utf-8")
    assert text.startswith("Basic_data:\ntimeStep\t0\n")
    assert text.endswith("smNodes\nEOF")


def test_write_facets_ntn_header_and_rows(tmp_path):
    path = tmp_path / "facets-3.txt"
    write_facets_ntn(path, 3, {(0, 1): [2, 4, 1.5]}, "ntn", 0)
    lines = _lines(path)
    assert lines[1] == "timeStep\t3"
    assert lines[4] == "Facets_data:"
    assert lines[5].split() == ["iMesh", "jMesh", "inode", "jnode", "d", "f",
                                "ix", "jx", "iy", "jy", "fx", "fy"]
    assert len(lines[5]) == len("iMesh") + 20 * 11
    assert lines[6].split() == ["0", "1", "2", "4", "1.500000"]
    assert lines[-1] == "EOF"


def test_write_facets_gntn_mentions_ghost_nodes(tmp_path):
    path = tmp_path / "facets.txt"
    write_facets_ntn(path, 1, {(2, 5): [7]}, "gntn", 4)
    lines = _lines(path)
    assert lines[4] == "Facets_data: "
    assert lines[5].split()[:4] == ["iMesh", "jMesh", "inode", "s"]
    assert "there are 4  ghost nodes on each segment" in lines[5]
    assert lines[6].split() == ["2", "5", "7"]


def test_write_facets_ntn_unknown_method_has_no_header(tmp_path):
    path = tmp_path / "facets.txt"
    write_facets_ntn(path, 1, {(0, 2): [1]}, "nts", 0)
    lines = _lines(path)
    assert lines[4].split() == ["0", "2", "1"]
    assert lines[5] == "EOF"
    assert all("Facets_data" not in line for line in lines)