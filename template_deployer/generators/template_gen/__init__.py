from template_deployer.generators.template_gen.generator import compile_template
from template_deployer.generators.template_gen.writer import ArtifactStore

__all__ = ["compile_template", "ArtifactStore"]
