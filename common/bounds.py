class Bounds:
    def __init__ (self, left, top, width, height):
        self.left = left
        self.top = top
        self.width = width
        self.height = height

    @classmethod
    def from_ltrb(cls, left, top, right, bottom) -> "Bounds":
        """Build bounds from left/top/right/bottom edges."""
        return cls(left, top, right - left, bottom - top)

    def __str__(self) -> str:
        return f"Bounds({self.left}, {self.top}, {self.width}, {self.height})"

    def __repr__(self) -> str:
        return str(self)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Bounds):
            return NotImplemented
        return (self.left, self.top, self.width, self.height) == (other.left, other.top, other.width, other.height)

    @property
    def right(self):
        return self.left + self.width

    @property
    def bottom(self):
        return self.top + self.height

    def center(self) -> tuple[float, float]:
        return (self.left + self.width / 2, self.top + self.height / 2)

    def to_int(self) -> "Bounds":
        """
        Truncate edges to whole pixels, the way integer bounding boxes are drawn.

        Returns:
        - Bounds: New Bounds with integer left/top/right/bottom edges.
        """
        return Bounds.from_ltrb(int(self.left), int(self.top), int(self.right), int(self.bottom))

    def isInside(self, other, checkCenterOnly=False) -> bool:
        """
        Check if the current Bounds object is completely inside another Bounds object.

        Parameters:
        - other (Bounds): The other Bounds object to compare against.
        - checkCenterOnly (bool): Only require the center of this Bounds to be inside.

        Returns:
        - bool: True if the current Bounds object is completely inside the other Bounds object, False otherwise.
        """
        if checkCenterOnly:
            cx, cy = self.center()
            return other.left <= cx <= other.right and other.top <= cy <= other.bottom

        return self.left >= other.left and self.right <= other.right and self.top >= other.top and self.bottom <= other.bottom

    def area(self):
        """
        Calculate the area of the Bounds object.

        Returns:
        - float: The area of the Bounds object.
        """
        return self.width * self.height
