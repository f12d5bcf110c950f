# SPDX-License-Identifier: Apache-2.0
"""Content stream rescaling.

Prepends a ``cm`` (concatenate matrix) instruction to every page content
stream so that absolute-coordinate drawing lands on the smaller canvas.

A page's /Contents is either a single stream or an array of streams whose
decoded bytes are interpreted as one concatenated instruction sequence.
Streams can be shared between pages, so each distinct content unit is
rewritten once per run. Prepending twice would compound the scale for
every page after the first.

A single stream is rewritten in place. An array is merged into a new
stream and its members are left as they are, since a member (a shared
header, say) may also appear in other arrays or on its own.
"""

from __future__ import annotations

import logging
import zlib

import pikepdf  # type: ignore[import-untyped]

from .errors import StructuralError
from .models import Transform

logger = logging.getLogger(__name__)

ObjGen = tuple[int, int]
# Ordered identities of the streams making up one page's content
ContentKey = tuple[ObjGen, ...]


class ContentStreamTransformer:
    """Rescale page content streams by a fixed factor.

    One instance covers one run over one document. The set of already
    transformed content units lives on the instance.

    Attributes:
        transformed_count: Number of distinct content units rewritten.
        reused_count: Page references that pointed at an already
            rewritten content unit.
    """

    def __init__(self, pdf: pikepdf.Pdf, scale: float) -> None:
        self._pdf = pdf
        self._cm = pikepdf.ContentStreamInstruction(
            Transform.scale(scale).to_operands(), pikepdf.Operator("cm")
        )
        self._done: dict[ContentKey, pikepdf.Stream] = {}
        # Decoded bytes of each stream as it was before this run touched it
        self._original: dict[ObjGen, bytes] = {}
        self.reused_count = 0

    @property
    def transformed_count(self) -> int:
        return len(self._done)

    def transform_page(self, page_obj: pikepdf.Dictionary, page_index: int) -> bool:
        """Rescale the content of one page.

        Args:
            page_obj: Page dictionary. Its /Contents is repointed to the
                merged stream when it is an array.
            page_index: 0-indexed page number, for logging and errors.

        Returns:
            True if a content unit was rewritten, False if the page had no
            content or its content was already rewritten earlier in the run.

        Raises:
            StructuralError: If /Contents is malformed or a stream cannot be
                decoded or re-encoded.
        """
        contents = page_obj.get("/Contents")
        if contents is None:
            logger.debug("Page %d: no /Contents, nothing to scale", page_index)
            return False

        streams = self._resolve(contents, page_index)
        if not streams:
            logger.debug("Page %d: empty /Contents array", page_index)
            return False

        key: ContentKey = tuple(stream.objgen for stream in streams)
        done = self._done.get(key)
        if done is not None:
            logger.debug("Page %d: content %s already scaled", page_index, key)
            self.reused_count += 1
            if len(streams) > 1:
                page_obj.Contents = done
            return False

        try:
            if len(streams) == 1:
                done = self._rewrite_single(streams[0])
            else:
                done = self._merge(streams)
                page_obj.Contents = done
        except (pikepdf.PdfError, RuntimeError, TypeError, ValueError) as exc:
            raise StructuralError(
                f"Page {page_index}: failed to rewrite content {key}",
                cause=exc,
                page_index=page_index,
            ) from exc

        self._done[key] = done
        logger.debug(
            "Page %d: scaled content %s into stream %s", page_index, key, done.objgen
        )
        return True

    def _resolve(self, contents: pikepdf.Object, page_index: int) -> list[pikepdf.Stream]:
        if isinstance(contents, pikepdf.Stream):
            return [contents]
        if isinstance(contents, pikepdf.Array):
            streams = []
            for i, item in enumerate(contents):
                if not isinstance(item, pikepdf.Stream):
                    raise StructuralError(
                        f"Page {page_index}: /Contents[{i}] is not a stream",
                        page_index=page_index,
                    )
                streams.append(item)
            return streams
        raise StructuralError(
            f"Page {page_index}: /Contents is neither a stream nor an array of streams",
            page_index=page_index,
        )

    def _source_bytes(self, stream: pikepdf.Stream) -> bytes:
        data = self._original.get(stream.objgen)
        if data is None:
            data = stream.read_bytes()
            self._original[stream.objgen] = data
        return data

    def _rewrite_single(self, stream: pikepdf.Stream) -> pikepdf.Stream:
        # Arrays processed later read the cached bytes, not the scaled ones
        self._source_bytes(stream)
        self._write_scaled(stream, _is_flate(stream))
        return stream

    def _merge(self, streams: list[pikepdf.Stream]) -> pikepdf.Stream:
        merged = self._pdf.make_stream(
            b"\n".join(self._source_bytes(stream) for stream in streams)
        )
        self._write_scaled(merged, _is_flate(streams[0]))
        return merged

    def _write_scaled(self, stream: pikepdf.Stream, compress: bool) -> None:
        instructions = pikepdf.parse_content_stream(stream)
        instructions.insert(0, self._cm)
        data = pikepdf.unparse_content_stream(instructions)
        if compress:
            stream.write(zlib.compress(data), filter=pikepdf.Name.FlateDecode)
        else:
            stream.write(data)


def _is_flate(stream: pikepdf.Stream) -> bool:
    """Whether the stream is stored with FlateDecode as its only filter."""
    filters = stream.get("/Filter")
    if isinstance(filters, pikepdf.Array):
        return len(filters) == 1 and filters[0] == pikepdf.Name.FlateDecode
    return filters == pikepdf.Name.FlateDecode
