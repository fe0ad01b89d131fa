from data_designer.plugins.plugin import Plugin, PluginType

code_likelihood_plugin = Plugin(
    config_qualified_name="data_designer_code_likelihood.config.CodeLikelihoodColumnConfig",
    impl_qualified_name="data_designer_code_likelihood.generator.CodeLikelihoodColumnGenerator",
    plugin_type=PluginType.COLUMN_GENERATOR,
)
