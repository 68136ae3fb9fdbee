"""ResultNormalizer 단위 테스트"""
from kosha_gateway.schemas.law_schema import RawResultItem
from kosha_gateway.services.result_normalizer import ResultNormalizer
from tests.fixtures.kosha_payloads import raw_item


def _items(*dicts):
    return [RawResultItem.model_validate(d) for d in dicts]


class TestMergeAndDedup:
    def test_primary_before_secondary(self, normalizer):
        primary = _items(raw_item("A"), raw_item("B"))
        secondary = _items(raw_item("M1", category="6", filepath="https://kosha.or.kr/m1.mp4"))

        result = normalizer.normalize(primary, secondary)

        assert [r.document_id for r in result] == ["A", "B", "M1"]

    def test_duplicate_keeps_first_occurrence(self, normalizer):
        primary = _items(raw_item("A", title="산업안전보건법 제1조(목적)"))
        secondary = _items(raw_item("A", title="산업안전보건법 제99조", category="6",
                                    filepath="https://kosha.or.kr/dup.mp4"))

        result = normalizer.normalize(primary, secondary)

        assert len(result) == 1
        assert result[0].title == "산업안전보건법 제1조(목적)"

    def test_duplicate_of_dropped_item_is_not_revived(self, normalizer):
        # 첫 항목이 링크 없음으로 제외되어도 같은 ID의 뒤 항목은 쓰지 않음
        primary = _items(raw_item("X", category="7"))
        secondary = _items(raw_item("X", category="6", filepath="https://kosha.or.kr/x.mp4"))

        assert normalizer.normalize(primary, secondary) == []

    def test_order_not_changed_by_score(self, normalizer):
        primary = _items(raw_item("LOW", score=1.0), raw_item("HIGH", score=99.0))

        result = normalizer.normalize(primary, [])

        assert [r.document_id for r in result] == ["LOW", "HIGH"]
        assert result[1].relevance_score == 99.0

    def test_empty_inputs(self, normalizer):
        assert normalizer.normalize([], []) == []


class TestSnippet:
    def test_highlight_preferred(self, normalizer):
        item = _items(raw_item("A", content="본문", highlight_content="<em>사다리</em> 하이라이트"))[0]
        assert normalizer.snippet_for(item) == "<em>사다리</em> 하이라이트"

    def test_blank_highlight_falls_back_to_body(self, normalizer):
        item = _items(raw_item("A", content="본문 내용", highlight_content="   "))[0]
        assert normalizer.snippet_for(item) == "본문 내용"

    def test_placeholder_body_dropped(self, normalizer):
        primary = _items(raw_item("A", content="내용없음"), raw_item("B", content="정상 본문"))

        result = normalizer.normalize(primary, [])

        assert [r.document_id for r in result] == ["B"]

    def test_placeholder_inside_text_dropped(self, normalizer):
        primary = _items(raw_item("A", content="[본문 없음] 첨부파일 참조"))
        assert normalizer.normalize(primary, []) == []

    def test_blank_body_dropped(self, normalizer):
        primary = _items(raw_item("A", content="  \n "))
        assert normalizer.normalize(primary, []) == []

    def test_custom_markers(self, link_resolver):
        normalizer = ResultNormalizer(link_resolver=link_resolver, placeholder_markers=["N/A", ""])
        primary = _items(raw_item("A", content="N/A"), raw_item("B", content="내용없음"))

        result = normalizer.normalize(primary, [])

        # 빈 마커는 무시되고, 기본 마커 목록은 사용하지 않음
        assert [r.document_id for r in result] == ["B"]


class TestLinks:
    def test_item_without_link_dropped(self, normalizer):
        primary = _items(raw_item("A", category="7"), raw_item("B", category="1"))
        assert [r.document_id for r in normalizer.normalize(primary, [])] == ["B"]

    def test_every_item_has_link_and_snippet(self, normalizer):
        primary = _items(
            raw_item("A", category="1"),
            raw_item("B", category="5", title="작업환경측정 고시 제3조"),
            raw_item("C", category="6", filepath="https://kosha.or.kr/c.pdf"),
            raw_item("D", category="6", filepath="/relative/d.pdf"),
        )

        result = normalizer.normalize(primary, [])

        assert [r.document_id for r in result] == ["A", "B", "C"]
        for item in result:
            assert item.resolved_link.startswith("https://")
            assert item.snippet.strip()

    def test_aliases_in_dump(self, normalizer):
        result = normalizer.normalize(_items(raw_item("A", score=3.5)), [])
        dumped = result[0].model_dump(by_alias=True)
        assert set(dumped) == {"documentId", "title", "category", "resolvedLink", "snippet", "relevanceScore"}
