"""Scope a custom delimiter vocabulary to a block with nav_config_context."""

from llaves import NavConfig, Session, nav_config_context

text = r"<a, b> \big( x \big)"

print("default:", Session(text).forward_list().position)

angle = NavConfig(base_pairs=NavConfig().base_pairs + (("<", ">"),), horizon=500)
with nav_config_context(angle):
    session = Session(text)

print("with <>:", session.forward_list().position)
print("horizon:", session.config.horizon)
