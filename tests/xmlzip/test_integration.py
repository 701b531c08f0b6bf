"""End-to-end tests: XML file in, zip of fragments out."""

import pytest
from lxml import etree

from xmlzip.models import SplitConfig
from xmlzip.pipeline import split_to_zip

NS = {"r": "urn:example:records"}

# The records.xml fixture holds 100 <record> elements under /records/nested
RECORD_COUNT = 100
BATCH_SIZE = 10
STEM = "ZipEntry"


@pytest.fixture
def split_archive(tmp_path, fixtures_dir, zip_entries):
    """Split the records fixture and return (report, entries)."""
    output = tmp_path / "Records.zip"
    config = SplitConfig("record", batch_size=BATCH_SIZE, stem=STEM)

    report = split_to_zip(fixtures_dir / "records.xml", output, config)

    return report, zip_entries(output)


class TestRecordsFixture:
    """Split of the 100-record fixture into batches of 10."""

    def test_entry_names(self, split_archive) -> None:
        report, entries = split_archive

        expected = [f"{STEM}-{i:04d}.xml" for i in range(1, RECORD_COUNT // BATCH_SIZE + 1)]
        assert list(entries) == expected
        assert report.fragment_names == expected

    def test_each_entry_is_a_complete_document(self, split_archive) -> None:
        _, entries = split_archive

        for name, data in entries.items():
            assert len(data) > 0, name
            doc = etree.fromstring(data)

            assert doc.xpath("count(/r:records/r:frontMatter)", namespaces=NS) == 1
            assert doc.xpath("count(/r:records/r:nested/r:record)", namespaces=NS) == BATCH_SIZE

    def test_front_matter_text_survives_escaping(self, split_archive) -> None:
        _, entries = split_archive

        for data in entries.values():
            doc = etree.fromstring(data)
            title = doc.xpath("string(/r:records/r:frontMatter/r:title)", namespaces=NS)
            assert title == "Sample records & notes"

    def test_front_matter_bytes_identical(self, split_archive) -> None:
        _, entries = split_archive

        heads = {data.split(b"<record>", 1)[0] for data in entries.values()}

        assert len(heads) == 1

    def test_records_in_original_order(self, split_archive) -> None:
        _, entries = split_archive

        ids = []
        for data in entries.values():
            doc = etree.fromstring(data)
            ids.extend(doc.xpath("/r:records/r:nested/r:record/r:id/text()", namespaces=NS))

        assert ids == [str(i) for i in range(1, RECORD_COUNT + 1)]

    def test_rerun_is_byte_identical(self, split_archive, tmp_path, fixtures_dir, zip_entries) -> None:
        _, entries = split_archive
        output = tmp_path / "Again.zip"

        split_to_zip(
            fixtures_dir / "records.xml",
            output,
            SplitConfig("record", batch_size=BATCH_SIZE, stem=STEM),
        )

        assert zip_entries(output) == entries


class TestOtherBatchSizes:
    """Scenarios from the fragment-count contract."""

    def test_uneven_last_fragment(self, tmp_path, fixtures_dir, zip_entries) -> None:
        output = tmp_path / "out.zip"

        report = split_to_zip(
            fixtures_dir / "records.xml", output, SplitConfig("record", batch_size=30)
        )

        assert [f.split_count for f in report.fragments] == [30, 30, 30, 10]
        assert len(zip_entries(output)) == 4

    def test_single_fragment_for_large_batch(self, tmp_path, fixtures_dir, zip_entries) -> None:
        output = tmp_path / "out.zip"

        split_to_zip(fixtures_dir / "records.xml", output, SplitConfig("record", batch_size=1000))

        entries = zip_entries(output)
        original = etree.parse(str(fixtures_dir / "records.xml")).getroot()
        assert list(entries) == ["Fragment-0001.xml"]
        assert etree.tostring(etree.fromstring(entries["Fragment-0001.xml"])) == etree.tostring(original)


class TestBrokenInput:
    """Inputs that must not leave an archive behind."""

    def test_truncated_file_leaves_no_archive(self, tmp_path) -> None:
        source = tmp_path / "truncated.xml"
        source.write_bytes(b"<root><head>h</head><r>1</r><r>2</r><r>3</r><r>4")
        output = tmp_path / "out.zip"

        with pytest.raises(etree.XMLSyntaxError):
            split_to_zip(source, output, SplitConfig("r", batch_size=2))

        assert not output.exists()


class TestRootNamespace:
    """Namespace declarations copied onto every fragment."""

    def test_ampersand_in_namespace(self, tmp_path, zip_entries) -> None:
        source = tmp_path / "ns.xml"
        source.write_bytes(
            b'<root xmlns="urn:x?a=1&amp;b=2"><r>1</r><r>2</r></root>'
        )
        output = tmp_path / "out.zip"

        split_to_zip(source, output, SplitConfig("r", batch_size=1))

        entries = zip_entries(output)
        assert len(entries) == 2
        for data in entries.values():
            doc = etree.fromstring(data)
            assert doc.tag == "{urn:x?a=1&b=2}root"
