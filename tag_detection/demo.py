"""
Demo script to showcase tag_detection module usage
"""

import argparse
from pathlib import Path

import cv2

from tag_detection import TagDetector, TagMatcher, TagVisualizer
from tag_detection.synthetic import mirror, render_tag, rotate_quarter_turns, upright_source


def parse_args():
    """Parse command line arguments"""
    parser = argparse.ArgumentParser(description='Tag orientation detection demo on a synthetic tag')

    parser.add_argument(
        '-t', '--turns',
        type=int,
        default=1,
        help='Clockwise quarter turns applied to the synthetic tag (default: 1)'
    )

    parser.add_argument(
        '-m', '--mirror',
        action='store_true',
        help='Mirror the synthetic tag before rotating it'
    )

    parser.add_argument(
        '-s', '--size',
        type=int,
        default=128,
        help='Tag sub-image size in pixels (default: 128)'
    )

    parser.add_argument(
        '-o', '--output',
        default=str(Path(__file__).parent / "output"),
        help='Output directory (default: tag_detection/output)'
    )

    parser.add_argument(
        '--show',
        action='store_true',
        help='Display the comparison window'
    )

    return parser.parse_args()


def main():
    """Main demo function"""
    args = parse_args()
    size = (args.size, args.size)

    # Reference tag, upright
    reference, markers = render_tag(size, marker_length=args.size * 3 // 16,
                                     marker_thickness=args.size // 16, margin=args.size * 3 // 32)
    print(f"Rendered {args.size}x{args.size} tag with {len(markers)} markers")

    # Scene tag, transformed
    image, candidates = reference, markers
    source = upright_source(size)
    if args.mirror:
        image, candidates = mirror(image, candidates)
        source = source.mirror_x(args.size)
        print("Mirrored tag")
    image, candidates = rotate_quarter_turns(image, candidates, args.turns)
    print(f"Rotated tag by {(args.turns % 4) * 90} deg clockwise")

    # Detect
    print("\nDetecting tag...")
    detector = TagDetector(size, debug=True)
    result = detector.detect(candidates, source)

    if not result.is_tag_present:
        print("✗ Tag was not detected!")
        return

    print("✓ Tag successfully detected!")
    print(f"  Layout:          {result.layout.name}")
    print(f"  Rotation angle:  {result.rotation_angle:.1f}°")
    print(f"  Image rotation:  {result.image_rotation * 90}°")
    print(f"  Flipped:         {result.is_flipped_horizontally}")
    print(f"  Confidence:      {result.confidence:.2f}")

    # Normalize
    upright = detector.normalize_image(image, result, remove_padding=False, remove_markers=False)
    canonical = detector.normalize_image(image, result)
    reference_canonical = detector.normalize_image(reference, detector.detect(markers, upright_source(size)))

    match = TagMatcher().match(canonical, reference_canonical)
    print(f"\nTemplate match against reference: {'✓' if match.ok else '✗'} (score {match.score:.3f})")

    # Visualize
    visualizer = TagVisualizer()
    scene = visualizer.visualize(image, candidates=candidates)
    normalized_view = visualizer.visualize_with_info(upright, result, markers=detector.normalize_markers(result))
    comparison = visualizer.create_side_by_side(scene, normalized_view)

    output_dir = Path(args.output)
    output_dir.mkdir(parents=True, exist_ok=True)

    output_scene = output_dir / "demo_scene.png"
    output_canonical = output_dir / "demo_canonical.png"
    output_comparison = output_dir / "demo_comparison.png"

    cv2.imwrite(str(output_scene), image)
    cv2.imwrite(str(output_canonical), canonical)
    cv2.imwrite(str(output_comparison), comparison)

    print(f"\nResults saved:")
    print(f"  {output_scene}")
    print(f"  {output_canonical}")
    print(f"  {output_comparison}")

    if args.show:
        try:
            cv2.imshow("Scene vs normalized tag", comparison)
            cv2.waitKey(0)
            cv2.destroyAllWindows()
        except cv2.error:
            print("\nCannot display window (running in headless mode)")

    print("\nDemo completed!")


if __name__ == "__main__":
    main()
