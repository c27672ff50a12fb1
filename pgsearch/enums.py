import enum


class CaseInsensitiveEnum(str, enum.Enum):
    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            for member in cls:
                if member.value.lower() == value.lower():
                    return member
        return None


class SearchOrder(CaseInsensitiveEnum):
    asc = "asc"
    desc = "desc"
    none = "none"


class PatternMatchMode(CaseInsensitiveEnum):
    ilike = "ilike"
    like = "like"
    similar_to = "similar_to"


class SimilarityType(CaseInsensitiveEnum):
    full = "full"
    word = "word"
    strict = "strict"


class TermFunction(CaseInsensitiveEnum):
    websearch_to_tsquery = "websearch_to_tsquery"
    plainto_tsquery = "plainto_tsquery"
    phraseto_tsquery = "phraseto_tsquery"


class RankFunction(CaseInsensitiveEnum):
    ts_rank_cd = "ts_rank_cd"
    ts_rank = "ts_rank"


class FilterType(CaseInsensitiveEnum):
    OR = "or"
    CONCAT = "concat"
    NONE = "none"


class RankWeight(CaseInsensitiveEnum):
    A = "A"
    B = "B"
    C = "C"
    D = "D"


class DistanceMetric(CaseInsensitiveEnum):
    l2_distance = "l2_distance"
    max_inner_product = "max_inner_product"
    cosine_distance = "cosine_distance"
    l1_distance = "l1_distance"
    hamming_distance = "hamming_distance"
    jaccard_distance = "jaccard_distance"


class SearchMode(CaseInsensitiveEnum):
    ilike = "ilike"
    like = "like"
    similar_to = "similar_to"
    similarity = "similarity"
    full_text = "full_text"
    semantic = "semantic"
