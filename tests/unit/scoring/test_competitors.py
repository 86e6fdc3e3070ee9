from src.scoring.competitors import extract_competitors


def test_extract_competitors_filters_stop_words_and_short_tokens() -> None:
    text = "The best options are Supabase and Firebase. This works with Go too."

    assert extract_competitors(text) == ["Supabase", "Firebase"]


def test_extract_competitors_keeps_multi_word_names_in_order() -> None:
    text = "Try Auth Zero first, then Clerk. Clerk is great. Then Auth Zero again."

    assert extract_competitors(text) == ["Try Auth Zero", "Clerk", "Then Auth Zero"]


def test_extract_competitors_excludes_product_case_insensitively() -> None:
    text = "Use Resend for email, or Postmark. Resend Cloud is also fine."

    assert extract_competitors(text, exclude="resend") == ["Postmark"]


def test_extract_competitors_empty_exclude_keeps_everything() -> None:
    assert extract_competitors("Use Neon today", exclude="") == ["Use Neon"]
