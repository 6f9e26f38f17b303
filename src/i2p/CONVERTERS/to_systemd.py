"""
Converters for generating systemd service files from a Formation.
"""
import os
import shlex
from jinja2 import Template
from ..MODELS.formation import Formation
from ..REGISTRY.image_reference import ImageReference

SYSTEMD_TEMPLATE = """
[Unit]
Description=I2P Process: {{ name }} ({{ image }})
After=docker.service
Requires=docker.service

[Service]
Type=simple
ExecStartPre=-/usr/bin/docker rm -f {{ container }}
ExecStart=/usr/bin/docker run --rm --name {{ container }} {{ image }} {{ command }}
ExecStop=/usr/bin/docker stop {{ container }}
Restart={{ restart_policy }}

[Install]
WantedBy=multi-user.target
"""


class SystemdConverter:
    """
    Converts a Formation into one systemd unit file per process.
    """

    def __init__(self, formation: Formation, image: ImageReference, app: str = "app",
                 restart_policy: str = "always"):
        """
        Initializes the systemd converter.

        :param formation: The Formation to convert.
        :param image: The image every process runs from.
        :param app: Prefix for unit and container names.
        :param restart_policy: Value of the Restart= directive.
        """
        self.formation = formation
        self.image = image
        self.app = app
        self.restart_policy = restart_policy
        self.template = Template(SYSTEMD_TEMPLATE)

    def unit_name(self, process: str) -> str:
        return f"i2p-{self.app}-{process}.service"

    def render(self, process: str) -> str:
        """
        Renders the unit file of a single process.
        """
        return self.template.render(
            name=process,
            image=str(self.image),
            container=f"i2p-{self.app}-{process}",
            command=shlex.join(self.formation[process].command),
            restart_policy=self.restart_policy,
        )

    def convert(self, output_dir: str = "systemd"):
        """
        Generates systemd service files.

        :param output_dir: The directory where service files will be created.
        :return: The path to the output directory.
        """
        os.makedirs(output_dir, exist_ok=True)

        for name in self.formation:
            with open(os.path.join(output_dir, self.unit_name(name)), "w") as f:
                f.write(self.render(name))

        return output_dir
