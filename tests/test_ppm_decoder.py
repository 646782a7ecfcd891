import pytest

from ppmview.models.decode_options import DecodeOptions, FlushPolicy
from ppmview.models.errors import (
    InvalidDimensionError,
    InvalidMagicError,
    InvalidMaxValueError,
    InvalidSampleValueError,
    MalformedLineError,
    PixelCountError,
    PpmFormatError,
)
from ppmview.services.ppm_decoder import DecodeState, PpmDecoder, decode_ppm

LEGACY = DecodeOptions(flush_policy=FlushPolicy.LINE)


def test_single_red_pixel():
    img = decode_ppm(b"P3\n1 1\n255\n255 0 0\n", "red.ppm")
    assert (img.width, img.height, img.max_value) == (1, 1, 255)
    assert img.pixels == ((255, 0, 0, 255),)
    assert img.source_name == "red.ppm"


def test_two_pixels_on_one_line_keep_order():
    img = decode_ppm(b"P3\n2 1\n255\n10 20 30 40 50 60\n", "two.ppm")
    assert img.pixels == ((10, 20, 30, 255), (40, 50, 60, 255))


def test_samples_stream_across_lines():
    data = b"P3\n2 2\n255\n1 2\n3 4 5 6 7\n8 9 10 11\n12\n"
    img = decode_ppm(data, "stream.ppm")
    assert img.pixels == (
        (1, 2, 3, 255),
        (4, 5, 6, 255),
        (7, 8, 9, 255),
        (10, 11, 12, 255),
    )


def test_comments_anywhere_do_not_change_result():
    plain = b"P3\n2 1\n255\n10 20 30\n40 50 60\n"
    commented = (
        b"# leading\nP3\n# after magic\n2 1\n#\n255\n"
        b"10 20 30\n# inside data\n40 50 60\n# trailing"
    )
    a = decode_ppm(plain, "x")
    b = decode_ppm(commented, "x")
    assert (a.width, a.height, a.pixels) == (b.width, b.height, b.pixels)


def test_empty_lines_are_skipped():
    img = decode_ppm(b"\nP3\n\n1 1\n255\n\n1 2 3\n\n", "blank.ppm")
    assert img.pixels == ((1, 2, 3, 255),)


def test_crlf_file():
    img = decode_ppm(b"P3\r\n1 1\r\n255\r\n7 8 9\r\n", "crlf.ppm")
    assert img.pixels == ((7, 8, 9, 255),)


def test_no_trailing_newline():
    img = decode_ppm(b"P3\n1 1\n255\n0 128 255", "x")
    assert img.pixels == ((0, 128, 255, 255),)


@pytest.mark.parametrize("width,height", [(0, 0), (0, 5), (5, 0)])
def test_zero_area_yields_empty_buffer(width, height):
    img = decode_ppm(b"P3\n%d %d\n255\n" % (width, height), "empty.ppm")
    assert img.pixels == ()
    assert (img.width, img.height) == (width, height)


def test_pixel_count_matches_dimensions():
    data = b"P3\n3 2\n255\n" + b"1 2 3\n" * 6
    img = decode_ppm(data, "x")
    assert len(img.pixels) == img.width * img.height == 6


def test_decoding_is_idempotent():
    data = b"P3\n2 1\n255\n# c\n10 20 30 40 50 60\n"
    assert decode_ppm(data, "x") == decode_ppm(data, "x")


def test_alpha_is_always_opaque():
    img = decode_ppm(b"P3\n2 1\n255\n0 0 0 1 1 1\n", "x")
    assert all(p[3] == 255 for p in img.pixels)


# ---- header errors ----
@pytest.mark.parametrize("magic", [b"P6", b"P33", b"p3", b"P3 ", b" P3"])
def test_invalid_magic(magic):
    with pytest.raises(InvalidMagicError):
        decode_ppm(magic + b"\n1 1\n255\n1 2 3\n", "x")


@pytest.mark.parametrize(
    "size_line",
    [b"abc 10", b"10 abc", b"10", b"10 ", b" 10", b"10  10", b"10 10 10", b"10\t10", b"-1 2", b"+1 2"],
)
def test_invalid_dimension(size_line):
    with pytest.raises(InvalidDimensionError):
        decode_ppm(b"P3\n" + size_line + b"\n255\n", "x")


@pytest.mark.parametrize("max_line", [b"abc", b"25 5", b"-1", b"255 "])
def test_invalid_max_value(max_line):
    with pytest.raises(InvalidMaxValueError):
        decode_ppm(b"P3\n1 1\n" + max_line + b"\n1 2 3\n", "x")


@pytest.mark.parametrize("data", [b"", b"# only a comment\n", b"P3\n", b"P3\n1 1\n"])
def test_truncated_header(data):
    with pytest.raises(MalformedLineError):
        decode_ppm(data, "x")


# ---- data errors ----
@pytest.mark.parametrize("token", [b"300", b"256", b"x", b"-1", b"1.5", b"0x10"])
def test_invalid_sample_value(token):
    with pytest.raises(InvalidSampleValueError):
        decode_ppm(b"P3\n1 1\n255\n0 0 " + token + b"\n", "x")


@pytest.mark.parametrize("line", [b"1  2 3", b"1 2 3 ", b" 1 2 3", b"   "])
def test_empty_tokens_are_malformed(line):
    with pytest.raises(MalformedLineError):
        decode_ppm(b"P3\n1 1\n255\n" + line + b"\n", "x")


def test_too_few_pixels():
    with pytest.raises(PixelCountError):
        decode_ppm(b"P3\n2 1\n255\n1 2 3\n", "x")


def test_too_many_pixels():
    with pytest.raises(PixelCountError):
        decode_ppm(b"P3\n1 1\n255\n1 2 3\n4 5 6\n", "x")


def test_error_carries_line_number():
    with pytest.raises(InvalidSampleValueError) as info:
        decode_ppm(b"P3\n# c\n1 1\n255\n1 2 999\n", "x")
    assert info.value.line_number == 5
    assert str(info.value).startswith("line 5:")


def test_format_errors_are_value_errors():
    with pytest.raises(ValueError):
        decode_ppm(b"P6\n", "x")
    assert issubclass(InvalidMagicError, PpmFormatError)


# ---- flush policies ----
def test_end_of_data_flushes_partial_triplet_with_zeros():
    img = decode_ppm(b"P3\n2 1\n255\n1 2 3\n4\n", "x")
    assert img.pixels == ((1, 2, 3, 255), (4, 0, 0, 255))


def test_legacy_flush_uses_last_token_as_blue_with_stale_channels():
    img = PpmDecoder(LEGACY).decode(b"P3\n2 1\n255\n1 2 3 4\n", "x")
    assert img.pixels == ((1, 2, 3, 255), (1, 2, 4, 255))


def test_legacy_flush_starts_each_line_from_zero():
    img = PpmDecoder(LEGACY).decode(b"P3\n2 1\n255\n5 6 7\n9\n", "x")
    assert img.pixels == ((5, 6, 7, 255), (0, 0, 9, 255))


def test_policies_agree_when_lines_hold_whole_triplets():
    data = b"P3\n3 1\n255\n1 2 3 4 5 6\n7 8 9\n"
    assert decode_ppm(data, "x") == PpmDecoder(LEGACY).decode(data, "x")


def test_policies_differ_for_split_triplets():
    data = b"P3\n2 1\n255\n1 2\n3 4 5 6\n"
    assert decode_ppm(data, "x").pixels == ((1, 2, 3, 255), (4, 5, 6, 255))
    with pytest.raises(PixelCountError):
        # legacy turns "1 2" into its own pixel (1, 0, 2)
        PpmDecoder(LEGACY).decode(data, "x")


# ---- max value ----
def test_samples_pass_through_unscaled_by_default():
    img = decode_ppm(b"P3\n1 1\n15\n15 200 0\n", "x")
    assert img.max_value == 15
    assert img.pixels == ((15, 200, 0, 255),)


def test_rescale_maps_to_full_range():
    img = decode_ppm(b"P3\n2 1\n15\n15 0 5 10 15 1\n", "x", DecodeOptions(rescale=True))
    assert img.pixels == ((255, 0, 85, 255), (170, 255, 17, 255))


def test_rescale_rejects_samples_above_max():
    with pytest.raises(InvalidSampleValueError):
        decode_ppm(b"P3\n1 1\n15\n16 0 0\n", "x", DecodeOptions(rescale=True))


def test_rescale_with_zero_max():
    img = decode_ppm(b"P3\n1 1\n0\n0 0 0\n", "x", DecodeOptions(rescale=True))
    assert img.pixels == ((0, 0, 0, 255),)


def test_decode_state_has_exactly_four_members():
    assert [s.name for s in DecodeState] == ["MAGIC", "SIZE", "MAX", "DATA"]


# ---- oversized numbers ----
HUGE = b"1" * 5000


def test_huge_width_is_invalid_dimension():
    with pytest.raises(InvalidDimensionError):
        decode_ppm(b"P3\n" + HUGE + b" 1\n255\n", "x")


def test_huge_max_value_is_invalid_max_value():
    with pytest.raises(InvalidMaxValueError):
        decode_ppm(b"P3\n1 1\n" + HUGE + b"\n1 2 3\n", "x")


def test_huge_sample_is_invalid_sample_value():
    with pytest.raises(InvalidSampleValueError):
        decode_ppm(b"P3\n1 1\n255\n1 2 " + HUGE + b"\n", "x")


def test_leading_zeros_do_not_count_as_digits():
    img = decode_ppm(b"P3\n" + b"0" * 5000 + b"1 1\n255\n" + b"0" * 5000 + b"7 8 9\n", "x")
    assert (img.width, img.height) == (1, 1)
    assert img.pixels == ((7, 8, 9, 255),)
