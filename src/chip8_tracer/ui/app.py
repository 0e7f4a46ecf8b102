# src/chip8_tracer/ui/app.py
"""
PySide6アプリケーションのエントリポイント。
コマンドライン引数を解釈し、プログラムと設定を読み込んでメインウィンドウを起動します。
"""
import argparse
import logging
import sys
from typing import List, Optional

from PySide6.QtWidgets import QApplication

from chip8_tracer.config.builder import MachineBuilder
from chip8_tracer.config.loader import LOG_LEVELS, ConfigLoader, resolve_log_level
from chip8_tracer.config.models import EmulatorConfig
from chip8_tracer.loader.loader import RomLoader
from .main_window import MainWindow

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="chip8-tracer", description="CHIP-8 virtual machine")
    parser.add_argument("path", help="Path to a file containing CHIP-8 bytecode")
    parser.add_argument("-q", "--quirks", action="store_true",
                        help="Activate quirks mode (required for some games to work)")
    parser.add_argument("-c", "--config", metavar="FILE", help="YAML configuration file")
    parser.add_argument("--log-level", choices=LOG_LEVELS, type=str.upper,
                        help="Logging level (overrides the configuration file)")
    return parser

# @intent:responsibility 設定ファイルとコマンドライン引数を合成します。CLI側の指定が優先されます。
def load_config(args: argparse.Namespace) -> EmulatorConfig:
    config = ConfigLoader().load_from_file(args.config) if args.config else EmulatorConfig()
    if args.quirks:
        config.quirks = True
    if args.log_level:
        config.log_level = args.log_level
    return config

# @intent:responsibility アプリケーションを起動し、メインウィンドウを表示します。
def main(argv: Optional[List[str]] = None) -> int:
    """
    アプリケーションのメイン関数。
    """
    args = build_parser().parse_args(argv)
    config = load_config(args)
    logging.basicConfig(level=resolve_log_level(config.log_level),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    program = RomLoader().load_file(args.path)
    machine = MachineBuilder().build_machine(config, program)

    app = QApplication(sys.argv[:1])
    main_win = MainWindow(machine, config)
    main_win.show()
    main_win.start()
    return app.exec()

if __name__ == '__main__':
    sys.exit(main())
