"""Chinese kinship term tables.

Keys are kinship paths from "me" to the target, steps joined by ``PATH_SEP``;
e.g. ``"father,father"`` is 爷爷 (paternal grandfather). Supporting more
relatives is a matter of adding rows here.
"""

from __future__ import annotations

PATH_SEP = ","
POSSESSIVE = "的"
SELF_TERM = "我"

KINSHIP_TERMS: dict[str, str] = {
    # Self
    "": "我",

    # Parents
    "father": "爸爸",
    "mother": "妈妈",

    # Grandparents (paternal)
    "father,father": "爷爷",
    "father,mother": "奶奶",

    # Grandparents (maternal)
    "mother,father": "外公",
    "mother,mother": "外婆",

    # Great-grandparents
    "father,father,father": "曾祖父",
    "father,father,mother": "曾祖母",
    "mother,father,father": "外曾祖父",
    "mother,father,mother": "外曾祖母",
    "father,mother,father": "曾外祖父",
    "father,mother,mother": "曾外祖母",
    "mother,mother,father": "外曾外祖父",
    "mother,mother,mother": "外曾外祖母",

    # Children
    "son": "儿子",
    "daughter": "女儿",

    # Grandchildren
    "son,son": "孙子",
    "son,daughter": "孙女",
    "daughter,son": "外孙",
    "daughter,daughter": "外孙女",

    # Spouse
    "husband": "丈夫",
    "wife": "妻子",

    # Siblings
    "elder_brother": "哥哥",
    "younger_brother": "弟弟",
    "elder_sister": "姐姐",
    "younger_sister": "妹妹",

    # Father's siblings
    "father,elder_brother": "伯父",
    "father,younger_brother": "叔叔",
    "father,elder_sister": "姑姑",
    "father,younger_sister": "姑姑",

    # Father's siblings' spouses
    "father,elder_brother,wife": "伯母",
    "father,younger_brother,wife": "婶婶",
    "father,elder_sister,husband": "姑父",
    "father,younger_sister,husband": "姑父",

    # Mother's siblings
    "mother,elder_brother": "舅舅",
    "mother,younger_brother": "舅舅",
    "mother,elder_sister": "姨妈",
    "mother,younger_sister": "阿姨",

    # Mother's siblings' spouses
    "mother,elder_brother,wife": "舅妈",
    "mother,younger_brother,wife": "舅妈",
    "mother,elder_sister,husband": "姨父",
    "mother,younger_sister,husband": "姨父",

    # Cousins via father's brothers
    "father,elder_brother,son": "堂兄",
    "father,elder_brother,daughter": "堂姐",
    "father,younger_brother,son": "堂弟",
    "father,younger_brother,daughter": "堂妹",

    # Cousins via father's sisters
    "father,elder_sister,son": "表兄",
    "father,elder_sister,daughter": "表姐",
    "father,younger_sister,son": "表弟",
    "father,younger_sister,daughter": "表妹",

    # Cousins via mother's brothers
    "mother,elder_brother,son": "表兄",
    "mother,elder_brother,daughter": "表姐",
    "mother,younger_brother,son": "表弟",
    "mother,younger_brother,daughter": "表妹",

    # Cousins via mother's sisters
    "mother,elder_sister,son": "表兄",
    "mother,elder_sister,daughter": "表姐",
    "mother,younger_sister,son": "表弟",
    "mother,younger_sister,daughter": "表妹",

    # Siblings' children
    "elder_brother,son": "侄子",
    "elder_brother,daughter": "侄女",
    "younger_brother,son": "侄子",
    "younger_brother,daughter": "侄女",
    "elder_sister,son": "外甥",
    "elder_sister,daughter": "外甥女",
    "younger_sister,son": "外甥",
    "younger_sister,daughter": "外甥女",

    # Children's spouses
    "son,wife": "儿媳妇",
    "daughter,husband": "女婿",

    # Spouse's parents
    "husband,father": "公公",
    "husband,mother": "婆婆",
    "wife,father": "岳父",
    "wife,mother": "岳母",

    # Siblings' spouses
    "elder_brother,wife": "嫂子",
    "younger_brother,wife": "弟媳",
    "elder_sister,husband": "姐夫",
    "younger_sister,husband": "妹夫",

    # Spouse's siblings
    "husband,elder_brother": "大伯子",
    "husband,younger_brother": "小叔子",
    "husband,elder_sister": "大姑子",
    "husband,younger_sister": "小姑子",
    "wife,elder_brother": "大舅子",
    "wife,younger_brother": "小舅子",
    "wife,elder_sister": "大姨子",
    "wife,younger_sister": "小姨子",
}

# Single-step words used to chain a term together when no row matches.
GENERIC_TERMS: dict[str, str] = {
    "father": "父亲",
    "mother": "母亲",
    "son": "儿子",
    "daughter": "女儿",
    "husband": "丈夫",
    "wife": "妻子",
    "elder_brother": "兄",
    "younger_brother": "弟",
    "elder_sister": "姐",
    "younger_sister": "妹",
}


def path_key(path: list[str] | tuple[str, ...]) -> str:
    return PATH_SEP.join(path)


def lookup(path: list[str] | tuple[str, ...]) -> str | None:
    return KINSHIP_TERMS.get(path_key(path))


def generic_term(step: str) -> str:
    return GENERIC_TERMS.get(step, step)
