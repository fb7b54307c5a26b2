#!/usr/bin/env python3
"""
Joint Location Extractor - Command Line Version
Exports skeletal keypoints and synchronized camera data from a scene
"""

import argparse
import sys
from pathlib import Path

from joint_location_extractor import JointLocationExtractor
from core.scene_data import ExportSettings
from readers import SUPPORTED_EXTENSIONS, is_supported_format


def parse_resolution(value):
    """Parse WIDTHxHEIGHT"""
    try:
        width, height = value.lower().split('x')
        return (int(width), int(height))
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid resolution '{value}', expected WIDTHxHEIGHT")


def build_parser():
    parser = argparse.ArgumentParser(
        prog='extract_joints',
        description='Export bone/keypoint locations and camera data from a scene',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Export everything from a scene description
  python extract_joints.py scene.json --output-dir ./output

  # Only JSON files, custom camera report name
  python extract_joints.py scene.json --output-dir ./output --no-text --camera-filename Camera.txt

  # Wait before the camera pass (legacy delayed capture)
  python extract_joints.py scene.usda --output-dir ./output --delay 1.0

Supported input formats:
  .json    - Scene description (cameras, actors, skeletal meshes)
  .usd     - USD scene files (text or binary)
  .usda    - USD ASCII format
  .usdc    - USD crate (binary) format
        """
    )

    parser.add_argument('input', type=str, help='Input scene file (.json, .usd, .usda, .usdc)')
    parser.add_argument('--output-dir', type=str, required=True,
                        help='Output root directory')
    parser.add_argument('--no-text', action='store_true',
                        help='Do not write bone text files')
    parser.add_argument('--no-json', action='store_true',
                        help='Do not write bone JSON files')
    parser.add_argument('--text-base', type=str, default='BoneLocations.txt',
                        help='Bone text file name suffix (default: BoneLocations.txt)')
    parser.add_argument('--json-base', type=str, default='BoneLocations.json',
                        help='Bone JSON file name suffix (default: BoneLocations.json)')
    parser.add_argument('--camera-filename', type=str, default='',
                        help='Camera report file name (default: <CameraName>.txt)')
    parser.add_argument('--frame-filename', type=str, default='',
                        help='Captured frame file name (default: <CameraName>_Frame.png)')
    parser.add_argument('--delay', type=float,
                        help='Seconds to wait before the camera pass (default: run immediately)')
    parser.add_argument('--resolution', type=parse_resolution, default=(1920, 1080),
                        help='Image size for cameras without a render target (default: 1920x1080)')
    parser.add_argument('--no-frames', action='store_true',
                        help='Do not export captured frames')
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    # Validate input file exists
    input_path = Path(args.input)
    if not input_path.exists():
        print(f"Error: Input file not found: {args.input}", file=sys.stderr)
        sys.exit(1)

    # Validate file extension
    if not is_supported_format(input_path):
        print(f"Error: Unsupported file format: {input_path.suffix.lower()}", file=sys.stderr)
        print(f"Supported formats: {', '.join(sorted(SUPPORTED_EXTENSIONS))}", file=sys.stderr)
        sys.exit(1)

    settings = ExportSettings(
        write_text_file=not args.no_text,
        write_json_file=not args.no_json,
        text_file_name_base=args.text_base,
        json_file_name_base=args.json_base,
        camera_data_filename=args.camera_filename,
        render_target_image_filename=args.frame_filename,
        default_image_size=args.resolution,
        export_frames=not args.no_frames
    )
    if args.delay is not None:
        settings.data_extraction_delay = args.delay

    extractor = JointLocationExtractor()
    results = extractor.extract(
        str(input_path),
        args.output_dir,
        settings=settings,
        use_delay=args.delay is not None
    )

    if results.get('success'):
        print("✓ Extraction completed!")
        print(f"✓ Output: {args.output_dir}")
    else:
        print(f"\n✗ Extraction failed: {results.get('message', '')}", file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    main()
