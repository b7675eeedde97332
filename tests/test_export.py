import logging

import pytest

from nurbs_analytic import (
    Polynomial,
    format_polynomial,
    parse_polynomial,
    read_polynomials,
    save_coefficients,
    setup_logger,
    write_polynomials,
)


class TestFormat:
    def test_format(self):
        assert format_polynomial([1, 0, -1]) == "[1.0, 0.0, -1.0]"

    def test_parse(self):
        assert parse_polynomial("[1.0, 0.0, -1.0]\n") == [1.0, 0.0, -1.0]
        assert parse_polynomial("[]").is_zero()

    def test_parse_complex(self):
        p = Polynomial([1 + 2j, -0.5j])
        assert parse_polynomial(format_polynomial(p)) == p

    def test_parse_rejects_garbage(self):
        with pytest.raises(ValueError):
            parse_polynomial("1.0, 2.0")

    def test_full_precision(self):
        p = Polynomial([1 / 3, 2 / 7, 0.1])
        assert parse_polynomial(str(p)) == p


class TestFiles:
    def test_write_and_read(self, tmp_path):
        polys = [Polynomial([1.0, 2.0]), Polynomial([0.25]), Polynomial([3.0, 0.0, -1.5])]
        path = write_polynomials(tmp_path / "nested" / "polys.out", polys)
        assert path.exists()
        assert path.read_text().count("\n") == 3
        assert read_polynomials(path) == polys

    def test_save_coefficients(self, planar_cubic, tmp_path):
        paths = save_coefficients(planar_cubic, tmp_path)
        assert [p.name for p in paths] == ["coefs_num_x.out", "coefs_num_y.out", "coefs_den.out"]

        num_x, num_y, den = (read_polynomials(p) for p in paths)
        assert len(den) == planar_cubic.n_segments
        for i, segment in enumerate(planar_cubic.segments):
            assert num_x[i] == segment.numerators[0]
            assert num_y[i] == segment.numerators[1]
            assert den[i] == segment.denominator

    def test_curve_methods(self, planar_quadratic, tmp_path):
        paths = planar_quadratic.save_coefficients(tmp_path)
        assert len(paths) == 3
        path = planar_quadratic.save_denominators(tmp_path / "den.out")
        assert read_polynomials(path) == read_polynomials(paths[-1])

    def test_space_curve_axis_names(self, tmp_path):
        from nurbs_analytic import NurbsCurve
        curve = NurbsCurve.uniform(1, [1.0, 1.0], [[0, 0, 0], [1, 2, 3]])
        names = [p.name for p in save_coefficients(curve, tmp_path)]
        assert names == ["coefs_num_x.out", "coefs_num_y.out", "coefs_num_z.out", "coefs_den.out"]


class TestLogger:
    def test_setup_is_idempotent(self):
        logger = setup_logger('nurbs_analytic.test_idempotent')
        logger = setup_logger('nurbs_analytic.test_idempotent')
        assert len(logger.handlers) == 1

    def test_file_handler(self, tmp_path):
        log_file = tmp_path / "logs" / "run.log"
        logger = setup_logger('nurbs_analytic.test_file', log_file=str(log_file), level=logging.DEBUG)
        logger.debug("hello")
        for handler in logger.handlers:
            handler.flush()
        assert "hello" in log_file.read_text()
        for handler in logger.handlers:
            handler.close()
