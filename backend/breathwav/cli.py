#!/usr/bin/env python3
"""
Breathing Envelope - Main CLI Entry Point
=========================================
Unified CLI for applying and inspecting the breathing envelope.

Usage:
    breathwav apply
    breathwav apply sounds/brown_noise.wav sounds/nature_rain.wav --strict
    breathwav info sounds/brown_noise.wav
    breathwav envelope --samples 80000 --rate 8000 --points 11
    breathwav generate sounds/brown_noise.wav --kind brown
"""

import argparse
import logging
import sys
from pathlib import Path

import numpy as np


def cmd_apply(args):
    """Handle apply command."""
    from .config import ProcessingConfig
    from .processor import BreathProcessor

    config = ProcessingConfig(strict=args.strict, chunk_search=args.chunk_search)
    if args.files:
        config.files = list(args.files)

    processor = BreathProcessor(config)
    processor.process_files()

    return 0 if processor.failed_count == 0 else 1


def cmd_info(args):
    """Handle info command."""
    from .transformations import Transformations
    from .wav import parse_wav

    path = Path(args.input_file)
    if not path.is_file():
        print(f"Error: File not found: {path}")
        return 1

    container = parse_wav(path.read_bytes(), args.chunk_search)

    print("\n" + "=" * 50)
    print("WAV INFO")
    print("=" * 50)
    print(f"File: {path}")
    print(f"Sample Rate: {container.sample_rate} Hz")
    print(f"Channels: {container.channels}")
    print(f"Bit Depth: {container.bits_per_sample}")
    print(f"Samples: {container.sample_count}")
    print(f"Duration: {container.duration_seconds:.3f} seconds")
    print(f"Data Offset: {container.data_offset}")
    print(f"Header Bytes: {len(container.header)}")
    print(f"Peak: {Transformations.peak_level(container.samples):.4f}")
    print(f"RMS: {Transformations.calculate_rms_energy(container.samples):.4f}")

    return 0


def cmd_envelope(args):
    """Handle envelope command."""
    from .transformations import Transformations

    envelope = Transformations.breathing_envelope(args.samples, args.rate)
    if len(envelope) == 0:
        print("Envelope is empty")
        return 0

    points = max(2, args.points)
    indices = np.unique(np.linspace(0, len(envelope) - 1, points).astype(int))

    print(f"\nBreathing envelope: {args.samples} samples @ {args.rate}Hz\n")
    for i in indices:
        print(f"  {i / args.rate:8.3f}s  [{i:>8}]  {envelope[i]:.6f}")

    return 0


def cmd_generate(args):
    """Handle test sample generation command."""
    from .samples import SampleGenerator

    generator = SampleGenerator(sample_rate=args.rate, seed=args.seed)
    samples = generator.generate(args.kind, args.duration)
    output_path = generator.save(samples, args.output_file)

    print(f"Generated {args.kind}: {output_path} ({args.duration}s @ {args.rate}Hz, {len(samples)} samples)")
    return 0


def main(argv=None):
    """Main CLI entry point."""
    from .samples import SAMPLE_KINDS
    from .wav import CHUNK_STRATEGIES

    parser = argparse.ArgumentParser(
        prog='breathwav',
        description='Breathing envelope - apply a smooth rise/fall volume curve to mono 16-bit WAV files',
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging')

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # APPLY command
    apply_parser = subparsers.add_parser(
        'apply',
        help='Apply the breathing envelope and write <name>_breath.wav files'
    )
    apply_parser.add_argument('files', nargs='*', help='Input WAV files (default: built-in target list)')
    apply_parser.add_argument('--strict', action='store_true',
                              help='Abort on the first malformed file')
    apply_parser.add_argument('--chunk-search', choices=CHUNK_STRATEGIES, default='walk',
                              help='Chunk location strategy (default: walk)')
    apply_parser.set_defaults(func=cmd_apply)

    # INFO command
    info_parser = subparsers.add_parser(
        'info',
        help='Display WAV header information'
    )
    info_parser.add_argument('input_file', help='Input WAV file')
    info_parser.add_argument('--chunk-search', choices=CHUNK_STRATEGIES, default='walk')
    info_parser.set_defaults(func=cmd_info)

    # ENVELOPE command
    envelope_parser = subparsers.add_parser(
        'envelope',
        help='Print sampled points of the breathing envelope'
    )
    envelope_parser.add_argument('-n', '--samples', type=int, required=True, help='Total sample count')
    envelope_parser.add_argument('-r', '--rate', type=int, default=8000, help='Sample rate (Hz)')
    envelope_parser.add_argument('-p', '--points', type=int, default=11, help='Number of points to print')
    envelope_parser.set_defaults(func=cmd_envelope)

    # GENERATE command
    gen_parser = subparsers.add_parser(
        'generate',
        help='Generate a mono 16-bit test WAV'
    )
    gen_parser.add_argument('output_file', help='Output WAV path')
    gen_parser.add_argument('-k', '--kind', choices=SAMPLE_KINDS, default='brown')
    gen_parser.add_argument('-d', '--duration', type=float, default=10.0, help='Duration (seconds)')
    gen_parser.add_argument('-r', '--rate', type=int, default=8000, help='Sample rate (Hz)')
    gen_parser.add_argument('--seed', type=int, default=0, help='Random seed for noise kinds')
    gen_parser.set_defaults(func=cmd_generate)

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    if not args.command:
        parser.print_help()
        return 1

    try:
        return args.func(args)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
