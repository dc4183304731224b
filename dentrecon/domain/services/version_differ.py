from collections.abc import Iterable, Mapping, Sequence

from dentrecon.domain.entities.diff_result import DiffResult, ModifiedNote, NoteLine, NoteState
from dentrecon.domain.entities.finding import Finding
from dentrecon.domain.services.coercion import first_string, string_list
from dentrecon.domain.services.tooth_numbering import ToothNumberingConverter
from dentrecon.domain.value_objects.field_aliases import FINDING_ALIASES, first_present
from dentrecon.domain.value_objects.severity import Severity


class VersionDiffEngine:
    """Line-level comparison of two finding sets.

    Findings are flattened to ``(tooth, note)`` lines keyed by tooth and
    lower-cased note. A before line is unchanged when an after line has the
    same key and severity, modified when the first unconsumed after line with
    the same tooth and exactly the same note text carries a different
    severity, and removed otherwise. After lines left unconsumed whose key
    never appeared before are added.

    With several candidates the first one in after order wins; no
    further disambiguation is attempted.
    """

    def __init__(self, converter: ToothNumberingConverter | None = None) -> None:
        self.converter = converter or ToothNumberingConverter()

    def diff(self, before: Iterable[Finding], after: Iterable[Finding]) -> DiffResult:
        return self.diff_lines(flatten(before), flatten(after))

    def diff_rows(self, before: Sequence[object], after: Sequence[object]) -> DiffResult:
        """Diff raw rows as stored or rendered, without canonicalizing them first."""
        return self.diff_lines(self.lines_from_rows(before), self.lines_from_rows(after))

    def diff_lines(self, before: list[NoteLine], after: list[NoteLine]) -> DiffResult:
        result = DiffResult()
        consumed: set[int] = set()
        before_keys = {line.key for line in before}

        for old in before:
            unchanged = self._find_unchanged(after, old)
            if unchanged is not None:
                consumed.add(unchanged)
                continue

            match_index = self._find_transition(after, consumed, old)
            if match_index is not None:
                consumed.add(match_index)
                new = after[match_index]
                result.modified.append(
                    ModifiedNote(
                        tooth=old.tooth,
                        before=NoteState(note=old.note, severity=old.severity),
                        after=NoteState(note=new.note, severity=new.severity),
                    )
                )
            else:
                result.removed.append(old)

        for index, new in enumerate(after):
            if index not in consumed and new.key not in before_keys:
                result.added.append(new)
        return result

    def lines_from_rows(self, rows: Sequence[object]) -> list[NoteLine]:
        """Flatten loosely shaped rows (finding records or ``{tooth, note}`` rows)."""
        lines: list[NoteLine] = []
        for row in rows:
            if not isinstance(row, Mapping):
                continue
            record = dict(row)
            tooth = self.converter.to_fdi(first_present(record, FINDING_ALIASES.tooth))
            if tooth is None:
                continue
            severity = (
                Severity.parse(first_string(*(record.get(k) for k in FINDING_ALIASES.severity)))
                or Severity.LOW
            )
            for key in FINDING_ALIASES.notes:
                for note in string_list(record.get(key)):
                    lines.append(NoteLine(tooth=tooth, note=note, severity=severity))
        return lines

    def _find_unchanged(self, after: list[NoteLine], old: NoteLine) -> int | None:
        for index, new in enumerate(after):
            if new.key == old.key and new.severity == old.severity:
                return index
        return None

    def _find_transition(
        self, after: list[NoteLine], consumed: set[int], old: NoteLine
    ) -> int | None:
        for index, new in enumerate(after):
            if (
                index not in consumed
                and new.tooth == old.tooth
                and new.note == old.note
                and new.severity != old.severity
            ):
                return index
        return None


def flatten(findings: Iterable[Finding]) -> list[NoteLine]:
    lines: list[NoteLine] = []
    for finding in findings:
        for note in finding.notes:
            text = note.strip()
            if text:
                lines.append(
                    NoteLine(tooth=finding.tooth_fdi, note=text, severity=finding.severity)
                )
    return lines
