# Build orchestration over the components, with injected ports
