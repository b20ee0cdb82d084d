from common.bounds import Bounds


class TestClass:
    def test_bounds1(self):
        bounds = Bounds(0, 0, 10, 10)
        assert bounds.left == 0 and bounds.top == 0 and bounds.width == 10 and bounds.height == 10

    def test_bounds2(self):
        bounds = Bounds(0, 0, 10, 10)
        assert bounds.area() == 100

    def test_bounds3(self):
        bounds1 = Bounds(0, 0, 10, 10)
        bounds2 = Bounds(2, 2, 4, 4)
        assert bounds2.isInside(bounds1)

    def test_bounds4(self):
        bounds1 = Bounds(0, 0, 10, 10)
        bounds2 = Bounds(2, 2, 10, 10)
        assert bounds2.isInside(bounds1, True)

    def test_bounds5(self):
        bounds1 = Bounds(0, 0, 10, 10)
        bounds2 = Bounds(6, 6, 10, 10)
        assert not bounds2.isInside(bounds1, True)

    def test_bounds6(self):
        bounds1 = Bounds(0, 0, 10, 10)
        bounds2 = Bounds(2, 2, 4, 4)
        assert not bounds1.isInside(bounds2)

    def test_from_ltrb(self):
        bounds = Bounds.from_ltrb(12, 12, 20, 36)
        assert bounds == Bounds(12, 12, 8, 24)
        assert bounds.right == 20 and bounds.bottom == 36

    def test_center(self):
        bounds = Bounds(10, 20, 30, 40)
        assert bounds.center() == (25, 40)

    def test_to_int_truncates(self):
        bounds = Bounds.from_ltrb(1.7, 2.2, 10.9, 20.5).to_int()
        assert bounds == Bounds(1, 2, 9, 18)
