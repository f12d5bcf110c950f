# SPDX-License-Identifier: Apache-2.0
"""Tests for content stream rescaling."""

from __future__ import annotations

import zlib

import pikepdf
import pytest

from pdf_resizer.core.content_stream import ContentStreamTransformer
from pdf_resizer.core.errors import StructuralError

SCALE = 0.5


def _assert_cm(op: tuple[str, list], scale: float = SCALE) -> None:
    operator, operands = op
    assert operator == "cm"
    assert [float(v) for v in operands] == pytest.approx([scale, 0, 0, scale, 0, 0])


class TestSingleStream:
    """Tests for pages whose /Contents is one stream."""

    def test_prepends_scale_matrix(self, make_pdf, parse_ops) -> None:
        """Test cm is first and the original instructions follow unchanged."""
        with make_pdf(b"0 0 1 rg\n100 100 100 100 re\nf\n") as pdf:
            page = pdf.pages[0]
            before = parse_ops(page)

            assert ContentStreamTransformer(pdf, SCALE).transform_page(page.obj, 0) is True

            after = parse_ops(page)
            _assert_cm(after[0])
            assert after[1:] == before

    def test_text_and_graphics_state_preserved(self, make_pdf, parse_ops) -> None:
        """Test q/Q nesting and text operators keep their order."""
        content = b"q 1 0 0 1 50 50 cm BT /F1 12 Tf 10 10 Td (Hello) Tj ET Q"
        with make_pdf(content) as pdf:
            page = pdf.pages[0]
            before = parse_ops(page)
            ContentStreamTransformer(pdf, SCALE).transform_page(page.obj, 0)
            after = parse_ops(page)
            assert [op for op, _ in after] == ["cm", "q", "cm", "BT", "Tf", "Td", "Tj", "ET", "Q"]
            assert after[1:] == before

    def test_empty_stream_gets_transform(self, make_pdf, parse_ops) -> None:
        """Test an empty stream still receives the transform."""
        with make_pdf(b"") as pdf:
            ContentStreamTransformer(pdf, SCALE).transform_page(pdf.pages[0].obj, 0)
            ops = parse_ops(pdf.pages[0])
            assert len(ops) == 1
            _assert_cm(ops[0])

    def test_missing_contents_skipped(self, make_pdf) -> None:
        """Test a page without /Contents is left alone."""
        with make_pdf(None) as pdf:
            transformer = ContentStreamTransformer(pdf, SCALE)
            assert transformer.transform_page(pdf.pages[0].obj, 0) is False
            assert "/Contents" not in pdf.pages[0].obj
            assert transformer.transformed_count == 0

    def test_flate_filter_preserved(self, make_pdf, parse_ops) -> None:
        """Test a compressed stream stays compressed and keeps other entries."""
        with make_pdf(b"") as pdf:
            stream = pdf.pages[0].obj.Contents
            stream.write(zlib.compress(b"100 100 100 100 re f"), filter=pikepdf.Name.FlateDecode)
            stream["/Custom"] = pikepdf.Name.Keep

            ContentStreamTransformer(pdf, SCALE).transform_page(pdf.pages[0].obj, 0)

            assert stream.Filter == pikepdf.Name.FlateDecode
            assert stream.Custom == pikepdf.Name.Keep
            assert [op for op, _ in parse_ops(stream)] == ["cm", "re", "f"]

    def test_uncompressed_stream_stays_uncompressed(self, make_pdf) -> None:
        """Test a stream without filters is written back without filters."""
        with make_pdf(b"0 0 m 10 10 l S") as pdf:
            stream = pdf.pages[0].obj.Contents
            ContentStreamTransformer(pdf, SCALE).transform_page(pdf.pages[0].obj, 0)
            assert "/Filter" not in stream
            assert stream.read_raw_bytes() == stream.read_bytes()


class TestSharedStreams:
    """Tests for streams referenced by more than one page."""

    def test_shared_stream_scaled_once(self, make_pdf, parse_ops) -> None:
        """Test two pages sharing a stream get exactly one cm."""
        with make_pdf(b"100 100 100 100 re f", b"") as pdf:
            shared = pdf.pages[0].obj.Contents
            pdf.pages[1].obj.Contents = shared

            transformer = ContentStreamTransformer(pdf, SCALE)
            assert transformer.transform_page(pdf.pages[0].obj, 0) is True
            assert transformer.transform_page(pdf.pages[1].obj, 1) is False

            ops = parse_ops(shared)
            assert [op for op, _ in ops].count("cm") == 1
            _assert_cm(ops[0])
            assert transformer.transformed_count == 1
            assert transformer.reused_count == 1
            assert pdf.pages[1].obj.Contents.objgen == shared.objgen

    def test_separate_transformers_compound(self, make_pdf, parse_ops) -> None:
        """Test deduplication is per run: a new run scales again."""
        with make_pdf(b"0 0 m") as pdf:
            ContentStreamTransformer(pdf, SCALE).transform_page(pdf.pages[0].obj, 0)
            ContentStreamTransformer(pdf, SCALE).transform_page(pdf.pages[0].obj, 0)
            ops = parse_ops(pdf.pages[0])
            assert [op for op, _ in ops] == ["cm", "cm", "m"]


class TestContentArrays:
    """Tests for pages whose /Contents is an array of streams."""

    def test_array_merged_into_new_stream(self, make_pdf, parse_ops) -> None:
        """Test members are concatenated and cm is inserted once at the front."""
        with make_pdf(b"") as pdf:
            first = pdf.make_stream(b"0 0 1 rg")
            second = pdf.make_stream(b"100 100 100 100 re f")
            page_obj = pdf.pages[0].obj
            page_obj.Contents = pikepdf.Array([first, second])

            assert ContentStreamTransformer(pdf, SCALE).transform_page(page_obj, 0) is True

            assert isinstance(page_obj.Contents, pikepdf.Stream)
            assert page_obj.Contents.objgen not in {first.objgen, second.objgen}
            ops = parse_ops(pdf.pages[0])
            _assert_cm(ops[0])
            assert [op for op, _ in ops[1:]] == ["rg", "re", "f"]
            assert first.read_bytes() == b"0 0 1 rg"
            assert second.read_bytes() == b"100 100 100 100 re f"

    def test_instruction_split_across_streams(self, make_pdf, parse_ops) -> None:
        """Test operands in one stream and operator in the next are joined."""
        with make_pdf(b"") as pdf:
            page_obj = pdf.pages[0].obj
            page_obj.Contents = pikepdf.Array(
                [pdf.make_stream(b"100 100"), pdf.make_stream(b"100 100 re f")]
            )
            ContentStreamTransformer(pdf, SCALE).transform_page(page_obj, 0)
            ops = parse_ops(pdf.pages[0])
            assert ops[1] == ("re", [100, 100, 100, 100])

    def test_compressed_first_member_keeps_merge_compressed(self, make_pdf, parse_ops) -> None:
        with make_pdf(b"") as pdf:
            first = pdf.make_stream(b"")
            first.write(zlib.compress(b"0 0 m"), filter=pikepdf.Name.FlateDecode)
            page_obj = pdf.pages[0].obj
            page_obj.Contents = pikepdf.Array([first, pdf.make_stream(b"10 10 l S")])

            ContentStreamTransformer(pdf, SCALE).transform_page(page_obj, 0)

            assert page_obj.Contents.Filter == pikepdf.Name.FlateDecode
            assert [op for op, _ in parse_ops(pdf.pages[0])] == ["cm", "m", "l", "S"]

    def test_shared_array_scaled_once(self, make_pdf, parse_ops) -> None:
        """Test two pages with the same member list both use one merged stream."""
        with make_pdf(b"", b"") as pdf:
            first = pdf.make_stream(b"0 0 m")
            second = pdf.make_stream(b"10 10 l S")
            for page in pdf.pages:
                page.obj.Contents = pikepdf.Array([first, second])

            transformer = ContentStreamTransformer(pdf, SCALE)
            for index, page in enumerate(pdf.pages):
                transformer.transform_page(page.obj, index)

            merged = pdf.pages[0].obj.Contents
            assert pdf.pages[1].obj.Contents.objgen == merged.objgen
            assert [op for op, _ in parse_ops(merged)] == ["cm", "m", "l", "S"]
            assert transformer.transformed_count == 1
            assert transformer.reused_count == 1

    def test_empty_array_skipped(self, make_pdf) -> None:
        """Test an empty array is treated as no content."""
        with make_pdf(b"") as pdf:
            page_obj = pdf.pages[0].obj
            page_obj.Contents = pikepdf.Array([])
            assert ContentStreamTransformer(pdf, SCALE).transform_page(page_obj, 0) is False

    def test_header_shared_by_two_arrays(self, make_pdf, parse_ops) -> None:
        """Test [H, P1] and [H, P2] each get exactly one cm and H is left intact."""
        with make_pdf(b"", b"") as pdf:
            header = pdf.make_stream(b"0 0 1 rg 10 800 100 20 re f")
            bodies = [pdf.make_stream(b"100 100 m"), pdf.make_stream(b"200 200 m")]
            for page, body in zip(pdf.pages, bodies):
                page.obj.Contents = pikepdf.Array([header, body])

            transformer = ContentStreamTransformer(pdf, SCALE)
            for index, page in enumerate(pdf.pages):
                assert transformer.transform_page(page.obj, index) is True

            for page, x in zip(pdf.pages, (100, 200)):
                ops = parse_ops(page)
                assert [op for op, _ in ops] == ["cm", "rg", "re", "f", "m"]
                assert ops[-1] == ("m", [x, x])
            assert [op for op, _ in parse_ops(header)] == ["rg", "re", "f"]
            assert transformer.transformed_count == 2

    @pytest.mark.parametrize("single_first", [True, False])
    def test_stream_alone_and_in_array(self, make_pdf, parse_ops, single_first: bool) -> None:
        """Test a stream used alone and inside an array is merged from its unscaled bytes."""
        with make_pdf(b"0 0 m", b"") as pdf:
            shared = pdf.pages[0].obj.Contents
            pdf.pages[1].obj.Contents = pikepdf.Array([shared, pdf.make_stream(b"S")])

            transformer = ContentStreamTransformer(pdf, SCALE)
            order = [0, 1] if single_first else [1, 0]
            for index in order:
                transformer.transform_page(pdf.pages[index].obj, index)

            assert [op for op, _ in parse_ops(pdf.pages[0])] == ["cm", "m"]
            assert [op for op, _ in parse_ops(pdf.pages[1])] == ["cm", "m", "S"]
            assert pdf.pages[1].obj.Contents.objgen != shared.objgen


class TestMalformedContents:
    """Tests for content references that cannot be resolved."""

    def test_dictionary_contents(self, make_pdf) -> None:
        """Test /Contents that is a plain dictionary is rejected."""
        with make_pdf(b"") as pdf:
            page_obj = pdf.pages[0].obj
            page_obj.Contents = pikepdf.Dictionary(Foo=1)
            with pytest.raises(StructuralError, match="neither a stream nor an array"):
                ContentStreamTransformer(pdf, SCALE).transform_page(page_obj, 0)

    def test_array_with_non_stream(self, make_pdf) -> None:
        """Test an array member that is not a stream is rejected."""
        with make_pdf(b"") as pdf:
            page_obj = pdf.pages[0].obj
            page_obj.Contents = pikepdf.Array([page_obj.Contents, pikepdf.Name.Oops])
            with pytest.raises(StructuralError, match=r"/Contents\[1\] is not a stream"):
                ContentStreamTransformer(pdf, SCALE).transform_page(page_obj, 0)

    def test_undecodable_stream(self, make_pdf) -> None:
        """Test a stream with an unsupported filter aborts with the cause attached."""
        with make_pdf(b"") as pdf:
            broken = pdf.make_stream(b"\x00\x01\x02")
            broken.Filter = pikepdf.Name("/NoSuchDecode")
            page_obj = pdf.pages[0].obj
            page_obj.Contents = pikepdf.Array([pdf.make_stream(b"0 0 m"), broken])
            with pytest.raises(StructuralError) as exc_info:
                ContentStreamTransformer(pdf, SCALE).transform_page(page_obj, 0)
            assert exc_info.value.cause is not None
            assert "caused by" in str(exc_info.value)
