"""테스트 자산 (KOSHA 스마트검색 응답)"""
