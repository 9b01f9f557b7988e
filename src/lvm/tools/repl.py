from pathlib import Path
import logging as lg
from typing import TextIO
import tomllib
import sys

import click

from lvm.common.formats import TextFormat
import lvm.common.errors as err
import lvm.codec.dispatch as dispatch
import lvm.runtime.vm as vm


VERSION = '0.1.0'


class ReplSettings:
    name: str
    prompt: str

    def __init__(self):
        self.name = 'lvm repl'
        self.prompt = '>'

    def update(self, name: str | None = None, prompt: str | None = None):
        if name is not None:
            self.name = name

        if prompt is not None:
            self.prompt = prompt

        return self


def load_settings(config_path: Path | None) -> ReplSettings:
    settings = ReplSettings()

    if config_path is None:
        return settings

    lg.debug(f'Reading settings from {config_path}')
    config = tomllib.loads(config_path.read_text())
    section = config.get('repl', {})
    return settings.update(name=section.get('name'), prompt=section.get('prompt'))


class Repl:
    settings: ReplSettings
    machine: vm.VM
    out: TextIO

    def __init__(self, settings: ReplSettings, out: TextIO | None = None):
        self.settings = settings
        self.machine = vm.VM()
        self.out = out if out is not None else sys.stderr

    def say(self, message: str):
        self.out.write(message + '\n')

    def banner(self):
        self.say(f'Welcome to `{self.settings.name} - {VERSION}` repl!')

    def help(self):
        self.say(f'{self.settings.name} - {VERSION} repl')
        self.say('Commands:')
        self.say('  :h  - prints the help')
        self.say('  :q  - terminates the application')
        self.say('  :i  - prints the registers')
        self.say('  :ix - prints the registers in hex')
        self.say('Anything else is executed as an instruction, e.g. LOAD $1 #200')

    def handle(self, line: str) -> bool:
        ''' Processes one input line, returns False when the session is over '''
        line = line.strip()

        match line:
            case '':
                pass
            case ':q':
                self.say('Quitting')
                return False
            case ':h':
                self.help()
            case ':i':
                self.say(self.machine.dump(TextFormat.DECIMAL))
            case ':ix':
                self.say(self.machine.dump(TextFormat.UPPER_HEX))
            case _:
                self.execute(line)

        return True

    def execute(self, line: str):
        try:
            instruction = dispatch.decode_text(line)
        except err.CodecError as e:
            self.say(f'Unknown: {line} ({e})')
            return

        self.say(f'Executing: {instruction}')

        try:
            self.machine.execute(instruction)
        except vm.ExecutionError as e:
            self.say(f'Error: {e}')

    def run(self):
        self.banner()
        prompt = f'{self.settings.prompt} '

        while True:
            try:
                line = click.prompt(prompt, prompt_suffix='', default='', show_default=False)
            except click.Abort:
                self.say('Quitting')
                break

            if not self.handle(line):
                break


@click.command()
@click.option('-v', '--verbose', is_flag=True, help='Sets logging level to debug')
@click.option('-c', '--config', type=click.Path(exists=True, path_type=Path), help='TOML settings file')
@click.option('--name', type=str, help='Session name')
@click.option('--prompt', type=str, help='Input prompt')
def repl(verbose: bool, config: Path | None, name: str | None, prompt: str | None):
    lg.basicConfig(level=lg.DEBUG if verbose else lg.INFO)
    settings = load_settings(config).update(name=name, prompt=prompt)
    Repl(settings).run()


if __name__ == '__main__':
    repl()
