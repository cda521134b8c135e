from core.utils.image_probe import probe_dimensions


class TestProbeDimensions:
    def test_png(self, make_image) -> None:
        assert probe_dimensions(make_image(2000, 1000, "PNG")) == (2000, 1000)

    def test_jpeg(self, sample_jpeg_binary) -> None:
        assert probe_dimensions(sample_jpeg_binary, file_name="a.jpg") == (8, 6)

    def test_gif(self, make_image) -> None:
        assert probe_dimensions(make_image(5, 7, "GIF")) == (5, 7)

    def test_undecodable_bytes(self) -> None:
        assert probe_dimensions(b"definitely not an image", file_name="bad.jpg") == (
            None,
            None,
        )

    def test_empty_bytes(self) -> None:
        assert probe_dimensions(b"") == (None, None)

    def test_truncated_header(self, sample_png_binary) -> None:
        assert probe_dimensions(sample_png_binary[:10]) == (None, None)
